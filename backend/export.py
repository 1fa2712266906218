# file: backend/export.py

import io
import random
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

import pandas as pd
from openpyxl.utils import get_column_letter

from backend import config
from backend.cities import get_city_name

SHEET_NAME = "Air Quality Data"
EXPORT_DAYS = 30
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

EXPORT_POLLUTANTS = [
    {"id": "NO2", "name": "Nitrogen Dioxide (NO₂)"},
    {"id": "HCHO", "name": "Formaldehyde (CH₂O)"},
    {"id": "AI", "name": "Aerosol Index"},
    {"id": "PM", "name": "Particulate Matter (PM)"},
    {"id": "O3", "name": "Ozone (O₃)"},
]

COLUMN_WIDTHS = [15, 18, 20, 20, 18, 25, 15, 10, 15, 12]


def _data_date() -> date:
    return datetime.strptime(config.DATA_DATE, "%Y-%m-%d").date()


def export_filename(city: str) -> str:
    return f"AirGuard_Export_{city}_{config.DATA_DATE}.xlsx"


def generate_export_table(city: str, rng: Callable[[], float] = random.random,
                          today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Daily rows for the export sheet, oldest first."""
    today = today or _data_date()
    location = get_city_name(city)

    rows = []
    for i in range(EXPORT_DAYS - 1, -1, -1):
        day = today - timedelta(days=i)
        row: Dict[str, Any] = {
            "Date": f"{day.strftime('%b')} {day.day}, {day.year}",
            "Location": location,
        }
        for pollutant in EXPORT_POLLUTANTS:
            base_value = rng() * 50 + 20
            variation = (rng() - 0.5) * 10
            row[pollutant["name"]] = f"{base_value + variation:.2f}"
        row["AQI"] = int(rng() * 100 + 30)
        row["Temperature (°F)"] = int(rng() * 30 + 60)
        row["Humidity (%)"] = int(rng() * 40 + 40)
        rows.append(row)
    return rows


def export_to_excel(rows: List[Dict[str, Any]]) -> bytes:
    """Render rows into an XLSX workbook and return its bytes."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=SHEET_NAME, index=False)
        worksheet = writer.sheets[SHEET_NAME]
        for index, width in enumerate(COLUMN_WIDTHS, start=1):
            worksheet.column_dimensions[get_column_letter(index)].width = width
    return buffer.getvalue()
