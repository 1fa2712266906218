#file: frontend/app.py

import os
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import asyncio
import pandas as pd
import streamlit as st

st.set_page_config(page_title="AirGuard - Air Quality Monitor", page_icon="🌍", layout="wide")
pd.options.display.float_format = "{:.2f}".format

from frontend.data_fetch import add_favorite, analyze, chat, clear_alert_history, fetch_alert_history, \
    fetch_alert_settings, fetch_aqi, fetch_cities, fetch_export, fetch_favorites, fetch_health_advisory, \
    fetch_historical, fetch_pollutants, fetch_validation, fetch_validation_parameters, remove_favorite, \
    save_alert_settings
from frontend.utils import forecast_to_frame, format_map_data, trends_to_frame, validation_to_frame
from frontend.ui_elements import display_advisories, display_alerts, display_aqi_card, display_forecast_chart, \
    display_historical_chart, display_map, display_pollutant_guide, display_trends_chart, display_validation_table

st.title("AirGuard - Air Quality Monitor")

cities = asyncio.run(fetch_cities())
if not cities :
    st.error("Backend unavailable. Start the FastAPI service and reload.")
    st.stop()
city_names = {city["code"] : city["name"] for city in cities}

with st.sidebar :
    selected_city = st.selectbox("City", list(city_names), format_func = lambda code : city_names[code])

    # Favorites
    st.subheader("Favorites")
    favorites = asyncio.run(fetch_favorites())
    favorite_codes = {favorite["code"] for favorite in favorites}
    if selected_city in favorite_codes :
        if st.button("Remove from favorites") :
            asyncio.run(remove_favorite(selected_city))
            st.rerun()
    elif st.button("Add to favorites") :
        asyncio.run(add_favorite(selected_city, city_names[selected_city], "USA"))
        st.rerun()
    for favorite in favorites :
        st.caption(f"⭐ {favorite['name']} ({favorite['country']})")

    # Alert settings
    st.subheader("AQI alerts")
    settings = asyncio.run(fetch_alert_settings())
    enabled = st.toggle("Enable alerts", value = settings["enabled"])
    threshold = st.slider("Alert threshold (AQI)", 0, 500, settings["threshold"], step = 10)
    watched = st.multiselect("Watched cities", list(city_names), default = [code for code in settings["cities"] if code in city_names],
                             format_func = lambda code : city_names[code])
    new_settings = {"enabled" : enabled, "threshold" : threshold, "cities" : watched}
    if new_settings != settings :
        asyncio.run(save_alert_settings(new_settings))

data = asyncio.run(fetch_aqi(selected_city))
if not data :
    st.warning("No air quality data available for the selected city.")
    st.stop()

current = data["current"]
advisory = asyncio.run(fetch_health_advisory(current["aqi"]))

col1, col2 = st.columns([1, 2])
with col1 :
    if advisory :
        display_aqi_card(current, advisory["category"])
    st.caption(f"Source: {data['dataSource']} · data date {data['dataDate']}")
    st.subheader("Alerts")
    display_alerts(data["alerts"])

with col2 :
    display_forecast_chart(forecast_to_frame(data["forecast"]))

col1, col2 = st.columns(2)
with col1 :
    display_trends_chart(trends_to_frame(data["trends"]))
with col2 :
    st.subheader("Health advisory")
    if advisory :
        display_advisories(advisory)

tab_history, tab_validation, tab_ai, tab_alerts, tab_guide = st.tabs(["History", "Validation", "AI assistant", "Alert history", "Pollutant guide"])

with tab_history :
    time_range = st.radio("Range", ["7d", "30d", "90d"], index = 1, horizontal = True)
    history = asyncio.run(fetch_historical(selected_city, time_range))
    display_historical_chart(pd.DataFrame(history))
    export_bytes = asyncio.run(fetch_export(selected_city))
    if export_bytes :
        st.download_button("Export to Excel", export_bytes, file_name = f"AirGuard_Export_{selected_city}.xlsx",
                           mime = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet")

with tab_validation :
    parameters = {p["id"] : f"{p['name']} - {p['full_name']} ({p['unit']})" for p in asyncio.run(fetch_validation_parameters())}
    parameter = st.selectbox("Parameter", list(parameters) or ["no2"], format_func = lambda pid : parameters.get(pid, pid))
    validation = asyncio.run(fetch_validation(parameter))
    stations_df = pd.DataFrame()
    if validation :
        stations_df = validation_to_frame(validation["pairs"])
        display_validation_table(stations_df, validation["counts"])
    display_map(format_map_data(cities, selected_city, stations_df))

with tab_ai :
    if st.button("Analyze current conditions") :
        with st.spinner("Analyzing...") :
            analysis = asyncio.run(analyze(city_names[selected_city], current["aqi"], current["pollutants"]))
        if analysis :
            st.markdown(analysis)
        else :
            st.warning("AI analysis is unavailable.")

    if "messages" not in st.session_state :
        st.session_state.messages = []
    for message in st.session_state.messages :
        with st.chat_message(message["role"]) :
            st.markdown(message["content"])
    prompt = st.chat_input("Ask about air quality")
    if prompt :
        st.session_state.messages.append({"role" : "user", "content" : prompt})
        reply = asyncio.run(chat(st.session_state.messages))
        st.session_state.messages.append({"role" : "assistant", "content" : reply or "The assistant is unavailable."})
        st.rerun()

with tab_alerts :
    alert_history = asyncio.run(fetch_alert_history())
    if alert_history :
        st.dataframe(pd.DataFrame(alert_history), hide_index = True)
        if st.button("Clear alert history") :
            asyncio.run(clear_alert_history())
            st.rerun()
    else :
        st.info("No threshold alerts recorded.")

with tab_guide :
    display_pollutant_guide(asyncio.run(fetch_pollutants()))
