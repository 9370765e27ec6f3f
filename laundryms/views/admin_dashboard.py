import streamlit as st
import plotly.express as px

from laundryms.errors import error_message
from laundryms.guard import ADMIN_DASHBOARD, CUSTOMER_DASHBOARD, CUSTOMER_ORDERS, LOGIN
from laundryms.log import get_logger
from laundryms.orders import admin_stats, list_all_orders, orders_frame
from laundryms.pricing import format_money
from laundryms.session import logout, navigate

logger = get_logger(__name__)


def render_admin_sidebar(client):
    with st.sidebar:
        st.title("🧺 LaundryMS")
        if st.button("📊 Admin Dashboard", use_container_width=True):
            navigate(ADMIN_DASHBOARD)
        if st.button("👥 Customer Orders", use_container_width=True):
            navigate(CUSTOMER_ORDERS)
        if st.button("🏠 Customer Dashboard", use_container_width=True):
            navigate(CUSTOMER_DASHBOARD)
        st.divider()
        if st.button("🚪 Logout", use_container_width=True):
            logout(client)
            navigate(LOGIN)


def render_admin_dashboard(cfg, client):
    render_admin_sidebar(client)

    st.title("📊 Admin Dashboard")
    st.caption("Overview of your laundry management system")

    # --- Fetch Data ---
    try:
        stats = admin_stats(client)
        df = orders_frame(list_all_orders(client))
    except Exception as e:
        logger.exception("Error fetching stats")
        st.toast("Failed to load statistics", icon="⚠️")
        st.error(f"Error loading data: {error_message(e)}")
        return

    # --- KPI Metrics ---
    col1, col2, col3 = st.columns(3)
    col1.metric("Total Customers", stats["total_customers"], help="Registered users")
    col2.metric("Total Orders", stats["total_orders"], help="All-time orders")
    col3.metric("Total Revenue", format_money(stats["total_revenue"], cfg.ui.currency), help="Total earnings")

    col4, col5 = st.columns(2)
    col4.metric("Completed", stats["completed"])
    col5.metric("Pending", stats["pending"])

    if df.empty:
        st.info("No orders found in the database.")
        return

    # --- Charts ---
    st.divider()
    c1, c2 = st.columns(2)
    with c1:
        by_status = df.groupby("status").size().reset_index(name="orders")
        fig = px.pie(by_status, names="status", values="orders", title="Orders by Status")
        st.plotly_chart(fig, use_container_width=True)
    with c2:
        by_service = df.groupby("service_type")["total"].sum().reset_index()
        fig = px.bar(by_service, x="service_type", y="total", title="Revenue by Service",
                     labels={"service_type": "Service", "total": f"Revenue ({cfg.ui.currency})"})
        st.plotly_chart(fig, use_container_width=True)

    # --- Export ---
    csv = df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "📥 Download orders as CSV",
        csv,
        "laundry_orders.csv",
        "text/csv",
        key="download-csv",
    )
