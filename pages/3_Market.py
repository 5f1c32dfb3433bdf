import streamlit as st

from agrosmart.components import load_css, page_header, trend_delta
from agrosmart.services import cached_market_prices, get_repository, get_settings
from agrosmart.visualisations import create_price_bar, create_price_history_chart, market_prices_frame

st.set_page_config(page_title="Market · AgroSmart", page_icon="🌱", layout="wide")
load_css()

crops = get_repository().load_all()
location = crops[0].location if crops else get_settings().default_location

page_header("Market Prices", f"Indicative mandi rates near {location}.")

with st.spinner("📊 Fetching market prices..."):
    prices = cached_market_prices(location)

if not prices:
    st.warning("Market data is unavailable right now. Please try again later.")
    st.stop()

# Price ticker
cols = st.columns(min(4, len(prices)))
for idx, item in enumerate(prices):
    with cols[idx % len(cols)]:
        st.metric(
            label=f"{item.crop} ({item.region})",
            value=f"₹{item.current_price:,.0f}",
            delta=trend_delta(item.trend),
            delta_color="off" if item.trend == "stable" else "normal",
        )
        st.caption(f"per {item.unit}")

st.plotly_chart(create_price_bar(prices), width="stretch", config={"displayModeBar": False})

# Detail chart for one crop
selected = st.selectbox("Price history for", [p.crop for p in prices])
active = next(p for p in prices if p.crop == selected)
if active.history:
    st.plotly_chart(create_price_history_chart(active), width="stretch", config={"displayModeBar": False})
else:
    st.info(f"No price history available for {active.crop}.")

with st.expander("View as table"):
    st.dataframe(market_prices_frame(prices), width="stretch", hide_index=True)

st.caption("*Prices are indicative regional averages. Actual rates for your specific crops may vary.")
