#file: frontend/ui_elements.py

import streamlit as st
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from typing import Any, Dict, List

SEVERITY_ICONS = {"high": "🚨", "moderate": "⚠️"}
PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def _bottom_legend(fig) :
    fig.update_layout(
        legend=dict(
            orientation="h",
            yanchor="top",
            y=-0.2,
            xanchor="center",
            x=0.5
        )
    )


def display_map(map_df) :
    """Display a map with city and station locations."""
    if "size" not in map_df.columns :
        map_df["size"] = 10

    fig_map = px.scatter_mapbox(
        map_df,
        lat = "lat",
        lon = "lon",
        hover_name = "name",
        size = "size",
        color = "kind",
        zoom = 2.5,
        height = 500,
        title = "Cities and ground stations"
    )
    fig_map.update_layout(
        mapbox_style = "open-street-map",
        margin = {
            "r" : 0,
            "t" : 30,
            "l" : 0,
            "b" : 0
        }
    )

    st.plotly_chart(fig_map)


def display_aqi_card(current: Dict[str, Any], category: Dict[str, Any]) :
    """Show the current AQI with its category colours and pollutant metrics."""
    st.markdown(
        f"<div style='background:{category['bg_color']};border-left:8px solid {category['color']};"
        f"padding:1rem;border-radius:0.5rem'>"
        f"<h2 style='margin:0;color:{category['color']}'>AQI {current['aqi']}</h2>"
        f"<b>{category['level']}</b><br/>{category['health_implications']}</div>",
        unsafe_allow_html = True
    )
    pollutants, weather = current["pollutants"], current["weather"]
    cols = st.columns(4)
    cols[0].metric("PM2.5 (µg/m³)", pollutants["pm25"])
    cols[1].metric("PM10 (µg/m³)", pollutants["pm10"])
    cols[2].metric("O₃ (µg/m³)", pollutants["o3"])
    cols[3].metric("NO₂ (µg/m³)", pollutants["no2"])
    cols = st.columns(3)
    cols[0].metric("Wind (m/s)", weather["wind_speed"])
    cols[1].metric("Temperature (°C)", weather["temperature"])
    cols[2].metric("Precipitation (mm)", weather["precipitation"])


def display_forecast_chart(forecast_df: pd.DataFrame) :
    """Display the 24-hour AQI forecast with pollutant lines."""
    if forecast_df.empty :
        st.info("No forecast available.")
        return
    fig = go.Figure()
    fig.add_trace(go.Bar(x = forecast_df["timestamp"], y = forecast_df["aqi"], name = "AQI", opacity = 0.4))
    for column, label in (("o3", "O₃"), ("no2", "NO₂"), ("pm25", "PM2.5")) :
        fig.add_trace(go.Scatter(x = forecast_df["timestamp"], y = forecast_df[column], mode = "lines", name = label))
    fig.update_layout(title = "24-hour forecast", xaxis_title = "Time", yaxis_title = "Value")
    _bottom_legend(fig)
    st.plotly_chart(fig)


def display_trends_chart(trends_df: pd.DataFrame) :
    """Display 7-day pollutant trends."""
    if trends_df.empty :
        st.info("No trend data available.")
        return
    fig = px.line(
        trends_df,
        x = "date",
        y = "value",
        color = "pollutant",
        markers = True,
        title = "7-day trends",
        labels = {"date" : "Date", "value" : "µg/m³", "pollutant" : "Pollutant"}
    )
    _bottom_legend(fig)
    st.plotly_chart(fig)


def display_historical_chart(history_df: pd.DataFrame) :
    if history_df.empty :
        st.info("No historical data available.")
        return
    fig = px.line(history_df, x = "date", y = ["aqi", "pm25", "pm10", "no2", "o3", "so2"], title = "History",
                  labels = {"date" : "Date", "value" : "Value", "variable" : "Series"})
    _bottom_legend(fig)
    st.plotly_chart(fig)


def display_alerts(alerts: List[Dict[str, Any]]) :
    """List engine alerts, high severity first."""
    if not alerts :
        st.success("No active pollution alerts.")
        return
    for alert in sorted(alerts, key = lambda a : a["severity"] != "high") :
        text = alert["message"]
        if alert["severity"] == "high" :
            st.error(text)
        else :
            st.warning(text)


def display_advisories(advisory: Dict[str, Any]) :
    """Show health advisory cards and sensitive-group warnings."""
    for item in sorted(advisory["advisories"], key = lambda a : PRIORITY_ORDER[a["priority"]]) :
        with st.expander(f"{item['title']} ({item['priority']})", expanded = item["priority"] == "high") :
            st.write(item["content"])
    if advisory["sensitive_groups"] :
        st.markdown("**Sensitive groups**")
        for warning in advisory["sensitive_groups"] :
            st.markdown(f"- {warning}")
    st.caption(advisory["category"]["cautionary_statement"])


def display_validation_table(validation_df: pd.DataFrame, counts: Dict[str, int]) :
    cols = st.columns(3)
    cols[0].metric("Good", counts.get("good", 0))
    cols[1].metric("Acceptable", counts.get("acceptable", 0))
    cols[2].metric("Poor", counts.get("poor", 0))
    st.dataframe(validation_df.drop(columns = ["lat", "lon"]), hide_index = True)


def display_pollutant_guide(pollutants: List[Dict[str, Any]]) :
    """Reference card per pollutant: what it is, sources, health effects."""
    for pollutant in pollutants :
        with st.expander(f"{pollutant['formula']} - {pollutant['name']}") :
            st.write(pollutant["description"])
            st.markdown("**Sources:** " + ", ".join(pollutant["sources"]))
            st.markdown("**Health effects:**")
            for effect in pollutant["health_effects"] :
                st.markdown(f"- {effect}")
            st.caption(f"Safe level: {pollutant['safe_level']}")
