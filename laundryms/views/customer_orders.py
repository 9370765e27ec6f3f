import streamlit as st

from db.models import STATUSES, STATUS_PENDING
from laundryms.errors import error_message
from laundryms.log import get_logger
from laundryms.orders import admin_update_order, delete_order, format_pickup, list_all_orders, orders_frame
from laundryms.pricing import calculate_total, format_money
from laundryms.session import notify
from laundryms.views.admin_dashboard import render_admin_sidebar

logger = get_logger(__name__)


def _customer_field(order, field):
    profile = (order.get("customer") or {}).get("profile") or {}
    return profile.get(field) or "-"


def _render_view(cfg, order):
    pickup_day, pickup_at = format_pickup(order.get("pickup_date"), order.get("pickup_time"))
    st.markdown(
        f"- **Customer:** {_customer_field(order, 'name')} ({_customer_field(order, 'email')})\n"
        f"- **Service:** {order.get('service_type')}\n"
        f"- **Quantity:** {order.get('quantity')}\n"
        f"- **Total:** {format_money(float(order.get('total') or 0), cfg.ui.currency)}\n"
        f"- **Status:** {order.get('status')}\n"
        f"- **Pickup date:** {pickup_day}\n"
        f"- **Pickup time:** {pickup_at}"
    )


def _render_edit(cfg, client, order):
    key = f"admin_{order['id']}"
    quantity = st.number_input(
        "Quantity", min_value=0.0, step=1.0,
        value=float(order.get("quantity") or 0), key=f"{key}_qty",
    )
    st.metric("Total", format_money(calculate_total(order.get("service_type"), quantity), cfg.ui.currency))
    current = order.get("status") or STATUS_PENDING
    status = st.selectbox(
        "Status", STATUSES,
        index=STATUSES.index(current) if current in STATUSES else 0, key=f"{key}_status",
    )

    if st.button("Save Changes", type="primary", key=f"{key}_save"):
        try:
            admin_update_order(client, order, quantity, status)
        except Exception as e:
            logger.exception("Failed to update order %s", order["id"])
            st.toast(f"Failed to update order. {error_message(e)}", icon="⚠️")
            return
        notify("success", "Order updated!")
        st.rerun()


def _render_delete(client, order):
    st.warning("Are you sure you want to delete this order?")
    if st.button("Yes, delete", type="primary", key=f"admin_{order['id']}_delete"):
        try:
            delete_order(client, order["id"])
        except Exception:
            logger.exception("Failed to delete order %s", order["id"])
            notify("error", "Failed to delete order.")
        else:
            notify("success", "Order deleted!")
        st.rerun()


def render_customer_orders(cfg, client):
    render_admin_sidebar(client)
    st.title("👥 Customer Orders")

    try:
        with st.spinner("Loading orders..."):
            orders = list_all_orders(client)
    except Exception:
        logger.exception("Failed to load orders")
        st.toast("Failed to load orders.", icon="⚠️")
        return

    if not orders:
        st.info("No orders found.")
        return

    # --- Filters ---
    df = orders_frame(orders)
    status_filter = st.multiselect("Filter by Status", options=STATUSES, default=STATUSES)
    if status_filter:
        df = df[df["status"].isin(status_filter)]
    st.dataframe(df, use_container_width=True, hide_index=True)

    # --- Actions ---
    st.write("### Actions")
    by_id = {o["id"]: o for o in orders}
    order_id = st.selectbox(
        "Order",
        list(by_id),
        format_func=lambda oid: f"#{oid} · {_customer_field(by_id[oid], 'name')} · {by_id[oid].get('service_type')}",
    )
    order = by_id[order_id]

    view_tab, edit_tab, delete_tab = st.tabs(["👁️ View", "✏️ Edit", "🗑️ Delete"])
    with view_tab:
        _render_view(cfg, order)
    with edit_tab:
        _render_edit(cfg, client, order)
    with delete_tab:
        _render_delete(client, order)
