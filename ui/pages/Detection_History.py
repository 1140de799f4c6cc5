import streamlit as st

from teadoc.core.config import configure_logging, get_settings
from teadoc.core.errors import TeaDocError
from teadoc.services.detection_client import DetectionClient
from teadoc.services.history import CATEGORIES, HistoryController, RowKind, render
from teadoc.services.history.renderer import LOADING_TEXT

configure_logging()
settings = get_settings()

ALL_FEATURES = "all"

# Page configuration
st.set_page_config(
    page_title="Detection History — TeaDoc",
    page_icon="📊",
    layout="wide",
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
</style>
""", unsafe_allow_html=True)

st.markdown('<h1 class="main-title">📊 Detection History</h1>', unsafe_allow_html=True)

# Sidebar configuration
with st.sidebar:
    st.header("⚙️ Settings")

    backend_url = st.text_input(
        "Backend URL",
        value=settings.API_BASE_URL,
        help="🔗 Base address of the detection service",
    )

    st.divider()

    category = st.selectbox("🌿 Category", list(CATEGORIES))
    history_url = st.text_input(
        "History identifier",
        value=CATEGORIES[category].slug,
        help="Which tree or category history to load",
    )

    refresh = st.button("🔄 Refresh", use_container_width=True)

user = st.session_state.get("user")

# One controller per (backend, category, identifier); filter changes reuse it
view_key = (backend_url, category, history_url)
controller = st.session_state.get("history_controller")

if controller is None or st.session_state.get("history_key") != view_key:
    controller = HistoryController(DetectionClient(base_url=backend_url), session=user)
    try:
        with st.spinner(f"⏳ {LOADING_TEXT}"):
            controller.initialize(category, history_url)
    except TeaDocError as e:
        st.error(f"❌ {e}")
        st.stop()
    st.session_state["history_controller"] = controller
    st.session_state["history_key"] = view_key
elif refresh:
    with st.spinner(f"⏳ {LOADING_TEXT}"):
        controller.fetch()

controller.session = user

# Feature chips
options = [ALL_FEATURES] + controller.features
selected = st.radio(
    "Filter by result",
    options,
    index=options.index(controller.selected_feature) if controller.selected_feature in options else 0,
    horizontal=True,
)
controller.set_filter(None if selected == ALL_FEATURES else selected)

view = render(controller)

if view.greeting:
    st.markdown(f"**{view.greeting}**")
st.subheader(view.title)
st.caption(view.total_label)

for row in view.rows:
    if row.kind == RowKind.LOADING:
        st.info(f"⏳ {row.text}")
    elif row.kind == RowKind.ERROR:
        st.error(f"❌ {row.text}")
    elif row.kind == RowKind.EMPTY:
        st.info(f"📭 {row.text}")
    else:
        with st.container(border=True):
            col1, col2 = st.columns([1, 2])

            with col1:
                if row.image_uri:
                    st.image(row.image_uri, width=100)

            with col2:
                st.write(f"**Disease:** {row.label}")
                st.write(f"**Score:** {row.score}")
                st.write(f"**Ratio:** {row.ratio}")
                st.caption(f"📅 Date: {row.date}  🕒 Time: {row.time}")

# Footer
st.divider()
st.caption("💡 Pick a result above to narrow the list; use Refresh to reload from the server")
