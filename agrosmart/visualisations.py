from typing import List

import pandas as pd
import plotly.graph_objects as go

from .models import MarketPrice

TREND_COLORS = {"up": "#16a34a", "down": "#dc2626", "stable": "#9ca3af"}


def create_progress_gauge(percent: float, days_left: int, title: str = "Season Progress") -> go.Figure:
    """Gauge of how far the crop is through its sowing-to-harvest window."""
    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=round(percent, 1),
        number={'suffix': "%", 'font': {'size': 48, 'family': 'Inter', 'weight': 700}},
        domain={'x': [0, 1], 'y': [0, 1]},
        title={'text': f"{title}<br><span style='font-size:14px;color:#757575'>{days_left} days to harvest</span>",
               'font': {'size': 20, 'family': 'Inter'}},
        gauge={
            'axis': {'range': [0, 100], 'tickwidth': 2, 'tickcolor': "#ccc"},
            'bar': {'color': "#16a34a", 'thickness': 0.25},
            'bgcolor': "white",
            'borderwidth': 3,
            'bordercolor': "#e0e0e0",
            'steps': [
                {'range': [0, 33], 'color': '#f0fdf4'},
                {'range': [33, 66], 'color': '#dcfce7'},
                {'range': [66, 100], 'color': '#fef9c3'}
            ],
        }
    ))

    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font={'color': "#333", 'family': "Inter"},
        height=300,
        margin=dict(l=20, r=20, t=80, b=20)
    )

    return fig


def market_prices_frame(prices: List[MarketPrice]) -> pd.DataFrame:
    """Tabular view of current prices (one row per crop)."""
    return pd.DataFrame(
        [
            {
                "Crop": p.crop,
                "Price": p.current_price,
                "Unit": p.unit,
                "Trend": p.trend,
                "Region": p.region,
            }
            for p in prices
        ],
        columns=["Crop", "Price", "Unit", "Trend", "Region"],
    )


def price_history_frame(price: MarketPrice) -> pd.DataFrame:
    return pd.DataFrame(
        [{"date": h.date, "price": h.price} for h in price.history],
        columns=["date", "price"],
    )


def create_price_bar(prices: List[MarketPrice]) -> go.Figure:
    """Current price per crop, coloured by trend."""
    df = market_prices_frame(prices)

    fig = go.Figure()
    fig.add_trace(go.Bar(
        x=df["Crop"],
        y=df["Price"],
        marker_color=[TREND_COLORS.get(t, "#9ca3af") for t in df["Trend"]],
        text=[f"₹{v:,.0f}" for v in df["Price"]],
        textposition='outside',
        textfont=dict(size=13, weight=700),
        hovertemplate='<b>%{x}</b><br>₹%{y:,.0f}<extra></extra>'
    ))

    fig.update_layout(
        yaxis=dict(title="Price (₹)", gridcolor='#e0e0e0'),
        xaxis=dict(title=""),
        paper_bgcolor="white",
        plot_bgcolor="white",
        font=dict(family="Inter", size=13),
        height=350,
        margin=dict(l=50, r=30, t=40, b=50),
        showlegend=False,
    )

    fig.update_xaxes(showgrid=False, showline=True, linewidth=2, linecolor='#e0e0e0')
    fig.update_yaxes(showgrid=True, gridwidth=1, gridcolor='#e0e0e0')

    return fig


def create_price_history_chart(price: MarketPrice) -> go.Figure:
    """Line chart of the recent price history for one crop."""
    df = price_history_frame(price)

    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=df["date"],
        y=df["price"],
        mode='lines+markers',
        name=price.crop,
        line=dict(color='#16a34a', width=3),
        marker=dict(size=10, color='#16a34a', symbol='circle',
                    line=dict(width=2, color='white')),
        hovertemplate='<b>%{x}</b><br>₹%{y:,.0f} / ' + price.unit + '<extra></extra>'
    ))

    fig.update_layout(
        title=dict(text=f"{price.crop} price trend", font=dict(size=20, family='Inter', weight=600)),
        xaxis_title="",
        yaxis_title=f"₹ per {price.unit}",
        yaxis=dict(gridcolor='#e0e0e0'),
        xaxis=dict(gridcolor='#e0e0e0'),
        paper_bgcolor="white",
        plot_bgcolor="white",
        font=dict(family="Inter", size=14),
        hovermode='x unified',
        height=380,
        margin=dict(l=50, r=30, t=60, b=50)
    )

    fig.update_xaxes(showgrid=True, showline=True, linewidth=2, linecolor='#e0e0e0')
    fig.update_yaxes(showgrid=True, gridwidth=1, gridcolor='#e0e0e0')

    return fig
