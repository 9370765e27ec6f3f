from datetime import date

import streamlit as st

from db.models import STATUSES, STATUS_PENDING
from laundryms.errors import error_message
from laundryms.guard import ADMIN_DASHBOARD, LOGIN, ROLE_ADMIN
from laundryms.log import get_logger
from laundryms.orders import (
    OrderForm,
    delete_order,
    ensure_customer,
    format_pickup,
    list_customer_orders,
    order_stats,
    parse_date_str,
    parse_time_str,
    save_order,
)
from laundryms.pricing import SERVICES, SERVICE_UNITS, calculate_total, format_money
from laundryms.session import logout, navigate, notify
from laundryms.views.chat_widget import render_chat_widget

logger = get_logger(__name__)

NEW_ORDER = "new"


# --- Modal state (widget keys are prefilled before the widgets exist) ---

def _open_form(order=None):
    if order:
        editing_id = order["id"]
        form = OrderForm.from_order(order)
    else:
        editing_id = NEW_ORDER
        form = OrderForm(service_type=SERVICES[0], pickup_date=date.today())

    st.session_state.editing_order_id = editing_id
    st.session_state.order_service = form.service_type or SERVICES[0]
    st.session_state.order_quantity = float(form.quantity or 0)
    st.session_state.order_date = parse_date_str(form.pickup_date) or date.today()
    st.session_state.order_time = parse_time_str(form.pickup_time)
    st.session_state.order_status = form.status


def _close_form():
    st.session_state.pop("editing_order_id", None)


def _ask_delete(order_id):
    st.session_state.confirm_delete_id = order_id


def _cancel_delete():
    st.session_state.pop("confirm_delete_id", None)


# --- Sections ---

def _render_sidebar(cfg, client):
    with st.sidebar:
        st.title("🧺 LaundryMS")
        if st.button("🛡️ Admin Dashboard", use_container_width=True):
            if st.session_state.role != ROLE_ADMIN:
                st.toast("You can't access the Admin Dashboard!", icon="⚠️")
            else:
                navigate(ADMIN_DASHBOARD)

        if st.button("🚪 Logout", use_container_width=True):
            logout(client)
            navigate(LOGIN)

        st.divider()
        render_chat_widget(cfg)


def _render_order_form(cfg, client, customer):
    editing_id = st.session_state.editing_order_id
    st.subheader("Edit Order" if editing_id != NEW_ORDER else "New Order")

    with st.container(border=True):
        service = st.selectbox("Service", SERVICES, key="order_service")
        unit = SERVICE_UNITS.get(service, "unit")
        quantity = st.number_input(f"Quantity ({unit})", min_value=0.0, step=1.0, key="order_quantity")
        c1, c2 = st.columns(2)
        pickup_date = c1.date_input("Pickup date", key="order_date")
        pickup_time = c2.time_input("Pickup time", key="order_time")
        status = st.selectbox("Status", STATUSES, key="order_status")

        # Recomputed on every rerun, i.e. on every service/quantity change
        st.metric("Total", format_money(calculate_total(service, quantity), cfg.ui.currency))

        save_col, cancel_col = st.columns(2)
        saved = save_col.button("Save Order", type="primary", use_container_width=True)
        cancel_col.button("Cancel", on_click=_close_form, use_container_width=True)

    if not saved:
        return

    form = OrderForm(
        service_type=service,
        quantity=quantity,
        pickup_date=pickup_date,
        pickup_time=pickup_time,
        status=status,
    )
    order_id = None if editing_id == NEW_ORDER else editing_id
    try:
        save_order(client, customer.id, form, order_id=order_id)
    except Exception as e:
        logger.exception("Saving order failed")
        st.toast(f"Failed to save order! {error_message(e)}", icon="⚠️")
        return

    notify("success", "Order updated successfully!" if order_id else "Order created successfully!")
    _close_form()
    st.rerun()


def _render_orders(cfg, client, orders):
    st.subheader("Recent Orders")
    if not orders:
        st.info("No orders yet. Create your first order!")
        return

    confirm_id = st.session_state.get("confirm_delete_id")
    for order in orders:
        pickup_day, pickup_at = format_pickup(order.get("pickup_date"), order.get("pickup_time"))
        with st.container(border=True):
            c1, c2, c3, c4, c5 = st.columns([3, 2, 2, 1, 1])
            c1.markdown(f"**{order.get('service_type')}**  \n{pickup_day} · {pickup_at}")
            c2.write(f"Qty: {order.get('quantity')}")
            c3.write(f"{format_money(float(order.get('total') or 0), cfg.ui.currency)} · {order.get('status')}")
            c4.button("Edit", key=f"edit_{order['id']}", on_click=_open_form, args=(order,))
            c5.button("Delete", key=f"delete_{order['id']}", on_click=_ask_delete, args=(order["id"],))

            if confirm_id == order["id"]:
                st.warning("Are you sure you want to delete this order?")
                yes, no = st.columns(2)
                if yes.button("Yes, delete", key=f"confirm_{order['id']}", type="primary"):
                    try:
                        delete_order(client, order["id"])
                    except Exception as e:
                        logger.exception("Deleting order %s failed", order["id"])
                        notify("error", f"Failed to delete order! {error_message(e)}")
                    else:
                        notify("success", "Order deleted successfully!")
                    _cancel_delete()
                    st.rerun()
                no.button("Keep", key=f"keep_{order['id']}", on_click=_cancel_delete)


def render_customer_dashboard(cfg, client):
    _render_sidebar(cfg, client)

    # --- Lazily create profile + customer on first visit ---
    if st.session_state.get("customer") is None:
        try:
            st.session_state.customer = ensure_customer(client, st.session_state.user)
        except Exception:
            logger.exception("Failed to fetch/create profile/customer")
            st.toast("Failed to initialize your account!", icon="⚠️")
            return
    customer = st.session_state.customer

    st.title(f"👋 Welcome, {customer.name or 'there'}")

    try:
        with st.spinner("Loading orders..."):
            orders = list_customer_orders(client, customer.id)
    except Exception:
        logger.exception("Failed to load dashboard data")
        st.toast("Failed to load dashboard data", icon="⚠️")
        orders = []

    stats = order_stats(orders)
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Orders", stats["total_orders"])
    col2.metric("Completed", stats["completed"])
    col3.metric("Pending", stats["pending"])

    st.divider()
    if "editing_order_id" in st.session_state:
        _render_order_form(cfg, client, customer)
    else:
        st.button("➕ New Order", type="primary", on_click=_open_form)

    _render_orders(cfg, client, orders)
