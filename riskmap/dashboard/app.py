import streamlit as st
import requests

from riskmap.client import RiskMapClient
from riskmap.config import get_settings
from riskmap.models.errors import ValidationError
from riskmap.models.strategy import DEFAULT_EFFECTIVENESS, STRATEGY_ORDER
from riskmap.scoring.classification import country_risk_band
from riskmap.scoring.hrdd import compute_hrdd
from riskmap.scoring.presets import PRESETS, get_preset
from riskmap.telemetry import init_telemetry

init_telemetry()

# --- PAGE CONFIGURATION ---
st.set_page_config(
    page_title="RiskMap Labor Rights Assessment",
    layout="wide",
    initial_sidebar_state="expanded"
)

BAND_COLORS = {
    "low-risk": "#16a34a",
    "medium-risk": "#ca8a04",
    "high-risk": "#ea580c",
    "very-high-risk": "#dc2626",
}


# --- BACKEND INITIALIZATION ---
@st.cache_resource
def get_client():
    """One API client per server process."""
    settings = get_settings()
    return RiskMapClient(settings.api_url, timeout=settings.api_timeout)


client = get_client()


@st.cache_data(ttl=300)
def load_options():
    return client.fetch_countries(), client.fetch_industries(), client.using_fallback


countries, industries, using_fallback = load_options()


def apply_preset(name: str):
    for strategy, value in get_preset(name).items():
        st.session_state[f"coverage_{strategy.value}"] = int(value)
        st.session_state[f"effectiveness_{strategy.value}"] = int(DEFAULT_EFFECTIVENESS[strategy])


# --- SIDEBAR: SCOPE ---
with st.sidebar:
    st.header("Assessment Scope")

    if using_fallback:
        st.warning("● Demo Mode")
        st.caption("API unreachable. Scoring against the bundled reference tables.")
    else:
        st.success("● Live Data")

    industry = st.selectbox("Industry", [""] + industries, format_func=lambda i: i or "Select industry")
    selected = st.multiselect("Countries", countries)

    st.subheader("Activity Volume")
    weight_by_activity = st.toggle("Weight by activity volume", value=True)
    activity_volumes = {}
    if weight_by_activity:
        for name in selected:
            activity_volumes[name] = st.number_input(
                name, min_value=1, max_value=1000, value=10, key=f"activity_{name}"
            )

# --- MAIN WORKSPACE ---
st.title("Labor Rights Risk Assessment")
st.markdown("#### Human Rights Due Diligence (HRDD) Strategy Mix")

preset_cols = st.columns(len(PRESETS))
for col, name in zip(preset_cols, PRESETS):
    col.button(name.capitalize(), on_click=apply_preset, args=(name,), use_container_width=True)

custom_effectiveness = st.toggle("Customize effectiveness", value=False)

# Widget state starts from the balanced mix
for strategy in STRATEGY_ORDER:
    st.session_state.setdefault(f"coverage_{strategy.value}", int(PRESETS["balanced"][strategy]))
    st.session_state.setdefault(f"effectiveness_{strategy.value}", int(DEFAULT_EFFECTIVENESS[strategy]))

coverage = {}
effectiveness = {}
for strategy in STRATEGY_ORDER:
    cov_col, eff_col = st.columns([3, 1])
    coverage[strategy] = cov_col.slider(
        strategy.label, 0, 100, key=f"coverage_{strategy.value}"
    )
    if custom_effectiveness:
        effectiveness[strategy] = eff_col.number_input(
            "% effective", 0, 100, key=f"effectiveness_{strategy.value}"
        )
    else:
        eff_col.caption(f"({DEFAULT_EFFECTIVENESS[strategy]:.0f}% effective)")

total = sum(coverage.values())
live = compute_hrdd(coverage, effectiveness or None)

m1, m2, m3, m4 = st.columns(4)
m1.metric("Total coverage", f"{total}%", delta="OK" if total == 100 else "must be 100%",
          delta_color="normal" if total == 100 else "inverse")
m2.metric("Weighted effectiveness", f"{live.weighted_effectiveness_pct}%")
m3.metric("Coverage quality", live.coverage_quality)
m4.metric("Top strategy", live.dominant_strategy.label)

st.divider()

if st.button("Calculate Risk", type="primary", disabled=not (industry and selected)):
    try:
        result = client.calculate_risk(
            industry=industry,
            countries=selected,
            hrdd_strategies={s.value: v for s, v in coverage.items()},
            hrdd_effectiveness={s.value: v for s, v in effectiveness.items()} or None,
            activity_volumes=activity_volumes or None,
        )
    except ValidationError as e:
        st.error(e.message)
        st.stop()
    except requests.exceptions.HTTPError as e:
        body = e.response.json() if e.response is not None else {}
        st.error(body.get("error", "Request rejected"))
        st.stop()

    col_score, col_breakdown = st.columns([1, 2], gap="large")

    with col_score:
        st.subheader("Overall Risk")
        st.metric(result["risk_level"] + " Risk", f"{result['overall_risk']:.0f}")
        st.caption(
            f"Industry multiplier {result['industry_multiplier']} · "
            f"HRDD multiplier {result['hrdd_multiplier']:.2f}"
        )

    with col_breakdown:
        st.subheader("Country Risk Breakdown")
        for row in result["country_risks"]:
            band = country_risk_band(row["risk"])
            weight = f" ({row['weight']:.1f}% weight)" if row.get("weight") else ""
            st.markdown(
                f"<div style='display:flex;justify-content:space-between;"
                f"border-bottom:1px solid #e5e7eb;padding:4px 0;'>"
                f"<span>{row['country']}{weight}</span>"
                f"<span style='color:{BAND_COLORS[band]};font-weight:600;'>{row['risk']}</span>"
                f"</div>",
                unsafe_allow_html=True,
            )

    if result.get("assessment_id"):
        st.caption(f"Assessment ID: {result['assessment_id']}")
