import streamlit as st

from teadoc.core.config import configure_logging, get_settings
from teadoc.core.session import UserSession

configure_logging()
settings = get_settings()

# Page configuration
st.set_page_config(
    page_title="TeaDoc — Tea Plant Health",
    page_icon="🍃",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .main-title {
        font-size: 2.5rem;
        font-weight: 700;
        color: #275900;
        text-align: center;
        margin-bottom: 0.5rem;
    }

    .subtitle {
        text-align: center;
        color: #666;
        font-size: 1.1rem;
        margin-bottom: 2rem;
    }

    .detail-card {
        background: #f5f5f5;
        padding: 1.5rem;
        border-radius: 12px;
        border-left: 4px solid #275900;
        margin: 1rem 0;
    }
</style>
""", unsafe_allow_html=True)

st.markdown('<h1 class="main-title">🍃 TeaDoc</h1>', unsafe_allow_html=True)
st.markdown('<p class="subtitle">Tea plant health monitoring</p>', unsafe_allow_html=True)

# Sidebar: who is signed in and where they are
with st.sidebar:
    st.header("👤 Account")

    current = st.session_state.get("user")

    with st.form("session_form"):
        email = st.text_input("Email", value=current.email if current else "")
        user_id = st.text_input("User ID", value=current.user_id if current else "")

        col_lat, col_lon = st.columns(2)
        with col_lat:
            lat = st.text_input(
                "Latitude",
                value=str(current.latitude if current and current.latitude is not None else settings.DEFAULT_LATITUDE),
            )
        with col_lon:
            lon = st.text_input(
                "Longitude",
                value=str(current.longitude if current and current.longitude is not None else settings.DEFAULT_LONGITUDE),
            )

        saved = st.form_submit_button("💾 Save", use_container_width=True)

    if saved:
        if not email or not user_id:
            st.error("❌ Email and User ID are required")
        else:
            try:
                st.session_state["user"] = UserSession(
                    user_id=user_id.strip(),
                    email=email.strip(),
                    latitude=float(lat),
                    longitude=float(lon),
                )
                st.success("✅ Saved")
            except ValueError:
                st.warning("⚠️ Invalid coordinates. Location was not saved.")
                st.session_state["user"] = UserSession(user_id=user_id.strip(), email=email.strip())

    st.divider()
    st.info(f"📍 Detection service: `{settings.API_BASE_URL}`")

user = st.session_state.get("user")
st.markdown(f"**{user.greeting if user else 'Sign in from the sidebar to get started.'}**")

st.markdown("""
<div class="detail-card">
    <h4>About Your Tea State</h4>
    <p>Choose a tea tree where you can see some diseases and let us decide the treatments.</p>
</div>
<div class="detail-card">
    <h4>Suggestions</h4>
    <p>Check the tea leaves and scan if you see any odd spots.</p>
</div>
""", unsafe_allow_html=True)

col1, col2 = st.columns(2)
with col1:
    st.page_link("pages/Detection_History.py", label="View your past disease detections", icon="📊")
with col2:
    st.page_link("pages/Weather.py", label="Weather and disease risk", icon="🌦️")

# Footer
st.divider()
st.caption("💡 Use the sidebar to navigate between pages")
