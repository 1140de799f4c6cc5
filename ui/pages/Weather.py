import streamlit as st

from teadoc.core.config import configure_logging
from teadoc.core.errors import TeaDocError
from teadoc.services.weather import LOADING_TEXT, WeatherController, render_weather

configure_logging()

# Page configuration
st.set_page_config(
    page_title="Weather — TeaDoc",
    page_icon="🌦️",
    layout="centered",
)

st.title("🌦️ Weather on Rathganga")
st.info("💡 Check the tea leaves and scan if you see any odd spots")

user = st.session_state.get("user")
if user is None:
    st.warning("⚠️ Sign in from the home page to see the weather for your location.")
    st.stop()

controller = st.session_state.get("weather_controller")
if controller is None or controller.session != user:
    controller = WeatherController(user)
    try:
        with st.spinner(f"⏳ {LOADING_TEXT}"):
            controller.load()
    except TeaDocError as e:
        st.error(f"❌ {e}")
        st.stop()
    st.session_state["weather_controller"] = controller

col_prev, col_mid, col_next = st.columns([1, 4, 1])

with col_prev:
    if st.button("◀️", use_container_width=True, help="Previous day"):
        with st.spinner(f"⏳ {LOADING_TEXT}"):
            controller.previous_day()

with col_next:
    if st.button("▶️", use_container_width=True, help="Next day"):
        with st.spinner(f"⏳ {LOADING_TEXT}"):
            controller.next_day()

view = render_weather(controller)

with col_mid:
    if view.loading:
        st.info(f"⏳ {LOADING_TEXT}")
    elif view.error:
        st.error(f"❌ {view.error}")
    elif view.rows:
        st.markdown(f"### {view.date_label}")
        with st.container(border=True):
            for label, value in view.rows:
                col_label, col_value = st.columns(2)
                col_label.markdown(f"**{label}:**")
                col_value.write(value)
