"""Streamlit UI for the itinerary generator.

Run with: streamlit run ui/app.py
"""

# Add project root to sys.path for imports to work when run via streamlit
import sys
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[1]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st  # noqa: E402

from ui.helpers import (  # noqa: E402
    ItineraryRequestError,
    build_day_sections,
    build_preferences_payload,
    build_source_links,
    call_generate_itinerary,
    format_budget,
)

# Configuration
BACKEND_URL = "http://localhost:8000"

# Page config
st.set_page_config(
    page_title="Travel Planner AI",
    page_icon="🗺️",
    layout="wide",
)

# Initialize session state
if "response" not in st.session_state:
    st.session_state.response = None
if "error" not in st.session_state:
    st.session_state.error = None
if "submitted_budget" not in st.session_state:
    st.session_state.submitted_budget = None

# Title
st.title("🗺️ Travel Planner AI")
st.markdown("*Your personal assistant for planning the perfect trip.*")
st.divider()

col_left, col_right = st.columns([1, 2])

# =============================================================================
# LEFT COLUMN - PREFERENCES FORM
# =============================================================================
with col_left:
    st.subheader("📋 Trip Preferences")

    with st.form("preferences_form"):
        destination = st.text_input("Destination *", value="Kyoto", help="Required")
        duration = st.number_input("Duration (days) *", min_value=1, max_value=30, value=3, step=1)
        interests = st.text_area("Interests", value="food, temples, gardens")

        col_budget, col_currency = st.columns([2, 1])
        with col_budget:
            budget = st.number_input("Budget *", min_value=0.0, value=1000.0, step=50.0)
        with col_currency:
            currency = st.selectbox("Currency", options=["USD", "EUR", "IDR", "JPY", "GBP"])

        use_location = st.checkbox(
            "Use my location",
            value=False,
            help="Grounds suggestions in nearby places using map search",
        )
        col_lat, col_lon = st.columns(2)
        with col_lat:
            latitude = st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=0.0, format="%.5f")
        with col_lon:
            longitude = st.number_input(
                "Longitude", min_value=-180.0, max_value=180.0, value=0.0, format="%.5f"
            )

        submitted = st.form_submit_button("🚀 Generate Itinerary", type="primary", use_container_width=True)

    if submitted:
        if not destination.strip():
            st.session_state.error = "Destination is required"
            st.session_state.response = None
        else:
            payload = build_preferences_payload(
                destination=destination,
                duration=int(duration),
                interests=interests,
                budget=float(budget),
                currency=currency,
                use_location=use_location,
                latitude=latitude,
                longitude=longitude,
            )
            with st.spinner("Crafting your dream itinerary... this may take a moment."):
                try:
                    st.session_state.response = call_generate_itinerary(BACKEND_URL, payload)
                    st.session_state.error = None
                    st.session_state.submitted_budget = format_budget(float(budget), currency)
                except ItineraryRequestError as e:
                    st.session_state.error = e.message
                    st.session_state.response = None

    if st.session_state.error:
        st.error(f"❌ {st.session_state.error}")

# =============================================================================
# RIGHT COLUMN - ITINERARY
# =============================================================================
with col_right:
    st.subheader("🧳 Your Itinerary")

    if st.session_state.response:
        data = st.session_state.response.get("itineraryData", {})
        sources = st.session_state.response.get("sourceUrls", [])

        st.markdown(f"## {data.get('destination', '')} · {data.get('duration') or '?'} days")

        st.markdown("### Overview")
        st.markdown(data.get("overview") or "_No overview available_")

        sections = build_day_sections(data)
        if sections:
            for section in sections:
                st.markdown(section)
        else:
            st.info("No day-by-day plan could be extracted. See the overview above.")

        packing = data.get("packingSuggestions") or []
        if isinstance(packing, list) and packing:
            st.markdown("### Packing Suggestions")
            for item in packing:
                st.markdown(f"- {item}")

        if data.get("notes"):
            st.markdown("### Notes")
            st.markdown(str(data["notes"]))

        st.markdown("### Budget")
        if st.session_state.submitted_budget:
            st.caption(f"Your budget: {st.session_state.submitted_budget}")
        st.markdown(data.get("budgetSummary") or "_No budget summary_")

        links = build_source_links(sources)
        if links:
            st.markdown("### Sources")
            for link in links:
                st.markdown(f"- {link}")

        with st.expander("🔧 Raw JSON Response (dev)"):
            st.json(st.session_state.response)
    else:
        st.info("👈 Fill out the form and hit **Generate Itinerary** to see your trip here.")
