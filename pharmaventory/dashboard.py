"""
Dashboard Principal de Pharmaventory
Landing, acceso y panel con inventario, analítica y alta de medicamentos
"""

import pandas as pd
import plotly.express as px
import streamlit as st

from pharmaventory.auth import SessionManager, get_auth_manager, show_user_info
from pharmaventory.state import SECTIONS, DashboardState
from pharmaventory.utils.views import (
    attention_message,
    current_date_label,
    expiring_soon_items,
    filtered_medicines,
    format_currency,
    greeting,
    low_stock_items,
    medicines_frame,
)

_STATE_KEY = "dashboard_state"


def get_dashboard_state() -> DashboardState:
    if _STATE_KEY not in st.session_state:
        st.session_state[_STATE_KEY] = DashboardState()
    return st.session_state[_STATE_KEY]


def render_notice(manager: SessionManager) -> None:
    notice = manager.notices.current()
    if notice is None:
        return
    if notice.is_error:
        st.error(f"❌ {notice.message}")
    else:
        st.success(f"✅ {notice.message}")


# ========== LANDING Y ACCESO ==========

def render_landing(state: DashboardState) -> None:
    st.markdown("# 💊 Pharmaventory")
    st.markdown("#### Optimize Growth")
    st.markdown(
        "Keep your pharmacy stocked, track expiry dates and stay ahead of "
        "low inventory from a single dashboard."
    )

    col1, col2, _ = st.columns([1, 1, 4])
    with col1:
        if st.button("Get Started", type="primary"):
            state.open_auth("login")
            st.rerun()
    with col2:
        if st.button("Sign up"):
            state.open_auth("register")
            st.rerun()


def render_auth_form(manager: SessionManager, state: DashboardState) -> None:
    registering = state.auth_mode == "register"
    values = state.auth_values

    st.subheader("📝 Create your account" if registering else "🔐 Welcome back")
    with st.form("auth_form"):
        if registering:
            values["full_name"] = st.text_input("Full name", value=values["full_name"])
        values["email"] = st.text_input("Email", value=values["email"])
        values["password"] = st.text_input("Password", value=values["password"], type="password")
        if registering:
            roles = ["pharmacist", "admin", "staff"]
            current = roles.index(values["role"]) if values["role"] in roles else 0
            values["role"] = st.selectbox("Role", roles, index=current)

        submitted = st.form_submit_button("Register" if registering else "Login", type="primary")

    if submitted:
        with st.spinner("Please wait..."):
            state.submit_auth(manager)
        # El aviso (éxito o error) se muestra en la siguiente pasada
        st.rerun()

    toggle_label = "Already have an account? Login" if registering else "Need an account? Register"
    if st.button(toggle_label):
        state.open_auth("login" if registering else "register")
        st.rerun()


# ========== SECCIONES DEL DASHBOARD ==========

def render_overview(manager: SessionManager, state: DashboardState) -> None:
    analytics = manager.analytics

    st.markdown(f"## {greeting(manager.user)}")
    st.caption(current_date_label())

    message = attention_message(analytics)
    if message:
        st.warning(f"⚠️ **Attention Required:** {message}")

    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("💊 Total Medicines", analytics.total_medicines if analytics else len(manager.medicines))
    with col2:
        st.metric("⚠️ Low Stock", analytics.low_stock_count if analytics else 0)
    with col3:
        st.metric("⏳ Expiring Soon", analytics.expiring_soon_count if analytics else 0)
    with col4:
        st.metric("💰 Inventory Value", format_currency(analytics.total_value if analytics else 0))

    st.markdown("### 📋 Recent Medicines")
    medicines = filtered_medicines(manager.medicines, state.search_query)[:5]
    if medicines:
        for medicine in medicines:
            st.markdown(
                f"**{medicine.name}** · {medicine.category or 'N/A'} · "
                f"{medicine.quantity} {medicine.unit or ''}"
            )
    else:
        st.info("No medicines found.")


def render_inventory(manager: SessionManager, state: DashboardState) -> None:
    st.markdown("## 📦 Inventory")

    col1, col2 = st.columns([4, 1])
    with col1:
        state.search_query = st.text_input(
            "🔍 Search medicines",
            key="inventory_search",
            placeholder="Name, generic name or category"
        )
    with col2:
        st.write("")
        if st.button("🔄 Refresh"):
            manager.refresh_medicines()
            st.rerun()

    medicines = filtered_medicines(manager.medicines, state.search_query)
    df = medicines_frame(medicines)

    def highlight_stock(row):
        color = "background-color: #fef3c7" if row["Status"] == "Low stock" else ""
        return [color] * len(row)

    if df.empty:
        st.info("No medicines found.")
    else:
        st.dataframe(df.style.apply(highlight_stock, axis=1), use_container_width=True, hide_index=True)
        st.caption(f"{len(medicines)} of {len(manager.medicines)} medicines")


def render_analytics(manager: SessionManager) -> None:
    st.markdown("## 📈 Analytics")
    if st.button("🔄 Refresh analytics"):
        manager.refresh_analytics()
        st.rerun()

    analytics = manager.analytics
    if analytics is None:
        st.info("No analytics available yet.")
        return

    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("Total Medicines", analytics.total_medicines)
    col2.metric("Total Value", format_currency(analytics.total_value))
    col3.metric("Low Stock", analytics.low_stock_count)
    col4.metric("Expiring Soon", analytics.expiring_soon_count)
    col5.metric("Expired", analytics.expired_count)

    counts = pd.DataFrame({
        "Status": ["Low stock", "Expiring soon", "Expired"],
        "Items": [analytics.low_stock_count, analytics.expiring_soon_count, analytics.expired_count],
    })
    fig = px.bar(counts, x="Status", y="Items", color="Status", title="Inventory health")
    st.plotly_chart(fig, use_container_width=True)

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("### ⚠️ Low Stock Items")
        items = low_stock_items(analytics)
        if not items:
            st.success("All stock levels are healthy 🎉")
        for item in items:
            st.markdown(f"- **{item.get('name', 'N/A')}**: {item.get('quantity', 0)} left")
    with col2:
        st.markdown("### ⏳ Expiring Soon")
        items = expiring_soon_items(analytics)
        if not items:
            st.success("No items expiring soon 🎉")
        for item in items:
            st.markdown(f"- **{item.get('name', 'N/A')}**: {item.get('expiry_date', 'N/A')}")


def render_add_medicine(manager: SessionManager, state: DashboardState) -> None:
    st.markdown("## ➕ Add Medicine")
    draft = state.draft

    with st.form(f"add_medicine_{state.draft_generation}"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name *", value=draft.name)
            generic_name = st.text_input("Generic name", value=draft.generic_name)
            category = st.text_input("Category *", value=draft.category)
            manufacturer = st.text_input("Manufacturer", value=draft.manufacturer)
            quantity = st.number_input("Quantity *", min_value=0, value=draft.quantity, step=1)
            unit = st.text_input("Unit", value=draft.unit)
        with col2:
            reorder_level = st.number_input("Reorder level", min_value=0, value=draft.reorder_level, step=1)
            unit_price = st.number_input("Unit price", min_value=0.0, value=float(draft.unit_price), step=0.5)
            batch_number = st.text_input("Batch number", value=draft.batch_number)
            expiry_date = st.date_input("Expiry date *", value=draft.expiry_date)
            location = st.text_input("Location", value=draft.location)
        description = st.text_area("Description", value=draft.description)

        submitted = st.form_submit_button("Add medicine", type="primary")

    if not submitted:
        return
    if not name.strip() or not category.strip():
        st.warning("⚠️ Name and category are required")
        return

    fields = {
        "name": name,
        "generic_name": generic_name,
        "category": category,
        "manufacturer": manufacturer,
        "quantity": quantity,
        "unit": unit,
        "reorder_level": reorder_level,
        "unit_price": unit_price,
        "batch_number": batch_number,
        "expiry_date": expiry_date,
        "location": location,
        "description": description,
    }
    for field_name, value in fields.items():
        draft.update_field(field_name, value)

    state.submit_draft(manager)
    st.rerun()


# ========== PUNTO DE ENTRADA ==========

def main() -> None:
    manager = get_auth_manager()
    state = get_dashboard_state()
    state.sync_with_session(manager.authenticated)

    render_notice(manager)

    if not manager.authenticated:
        if state.auth_mode:
            render_auth_form(manager, state)
        else:
            render_landing(state)
        return

    with st.sidebar:
        show_user_info(manager)
        st.markdown("---")
        sections = list(SECTIONS)
        selected = st.radio(
            "Navigation",
            sections,
            index=sections.index(state.active_section),
            format_func=SECTIONS.get
        )
        state.select_section(selected)
        st.markdown("---")
        if st.button("🚪 Sign out"):
            manager.sign_out()
            state.sync_with_session(manager.authenticated)
            st.rerun()

    if state.active_section == "inventory":
        render_inventory(manager, state)
    elif state.active_section == "analytics":
        render_analytics(manager)
    elif state.active_section == "add":
        render_add_medicine(manager, state)
    else:
        render_overview(manager, state)
