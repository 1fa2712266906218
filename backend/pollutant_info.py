# file: backend/pollutant_info.py

from typing import Dict, List, Optional

from pydantic import BaseModel


class PollutantInfo(BaseModel):
    id: str
    name: str
    formula: str
    description: str
    sources: List[str]
    health_effects: List[str]
    safe_level: str


POLLUTANTS_INFO: Dict[str, PollutantInfo] = {
    "pm25": PollutantInfo(
        id="pm25",
        name="Fine Particulate Matter",
        formula="PM2.5",
        description="Tiny particles or droplets in the air that are 2.5 micrometers or less in width. These "
                    "particles are so small they can penetrate deep into the lungs and even enter the bloodstream.",
        sources=["Vehicle exhaust and emissions", "Industrial facilities and power plants",
                 "Residential wood burning", "Wildfires and agricultural burning", "Construction and road dust"],
        health_effects=["Respiratory irritation and reduced lung function",
                        "Aggravation of asthma and chronic bronchitis",
                        "Increased risk of heart attacks and strokes",
                        "Premature death in people with heart or lung disease",
                        "Developmental issues in children"],
        safe_level="0-12 μg/m³ (WHO guideline)",
    ),
    "pm10": PollutantInfo(
        id="pm10",
        name="Coarse Particulate Matter",
        formula="PM10",
        description="Inhalable particles with diameters of 10 micrometers or less. While larger than PM2.5, these "
                    "particles can still penetrate into the lungs and cause health problems.",
        sources=["Dust from roads and construction sites", "Crushing and grinding operations",
                 "Agricultural activities", "Windblown dust from open lands", "Industrial emissions"],
        health_effects=["Irritation of airways and coughing", "Difficulty breathing and chest tightness",
                        "Aggravation of asthma symptoms", "Reduced lung function",
                        "Increased hospital admissions for respiratory issues"],
        safe_level="0-20 μg/m³ (WHO guideline)",
    ),
    "no2": PollutantInfo(
        id="no2",
        name="Nitrogen Dioxide",
        formula="NO₂",
        description="A reddish-brown gas with a sharp, harsh odor. It forms when fossil fuels are burned at high "
                    "temperatures and is a major component of urban air pollution.",
        sources=["Vehicle emissions (especially diesel)", "Power plants and industrial facilities",
                 "Gas stoves and heating appliances", "Cigarette smoke", "Welding operations"],
        health_effects=["Inflammation of airways and reduced immunity",
                        "Increased susceptibility to respiratory infections",
                        "Worsening of asthma and bronchitis", "Reduced lung development in children",
                        "Increased emergency room visits"],
        safe_level="0-25 μg/m³ annual mean (WHO guideline)",
    ),
    "o3": PollutantInfo(
        id="o3",
        name="Ground-level Ozone",
        formula="O₃",
        description="A gas formed when nitrogen oxides and volatile organic compounds react in sunlight. Levels "
                    "peak on hot, sunny afternoons.",
        sources=["Vehicle exhaust reacting in sunlight", "Industrial emissions", "Gasoline vapors",
                 "Chemical solvents"],
        health_effects=["Chest pain, coughing and throat irritation", "Reduced lung function",
                        "Aggravation of asthma", "Inflammation of the airways"],
        safe_level="0-100 μg/m³ peak season (WHO guideline)",
    ),
    "so2": PollutantInfo(
        id="so2",
        name="Sulfur Dioxide",
        formula="SO₂",
        description="A colorless gas with a pungent smell, released mainly by burning sulfur-containing fuels.",
        sources=["Coal and oil power plants", "Industrial processes and smelters", "Ships and locomotives",
                 "Volcanic activity"],
        health_effects=["Irritation of the respiratory system", "Bronchoconstriction in asthmatics",
                        "Aggravation of cardiovascular disease"],
        safe_level="0-40 μg/m³ 24-hour mean (WHO guideline)",
    ),
    "co": PollutantInfo(
        id="co",
        name="Carbon Monoxide",
        formula="CO",
        description="A colorless, odorless gas produced by incomplete combustion that reduces the blood's "
                    "ability to carry oxygen.",
        sources=["Vehicle exhaust", "Faulty heating appliances", "Wildfires", "Industrial processes"],
        health_effects=["Headaches and dizziness", "Reduced oxygen delivery to organs",
                        "Chest pain in people with heart disease", "Fatal at very high concentrations"],
        safe_level="0-4 mg/m³ 24-hour mean (WHO guideline)",
    ),
}


def get_pollutant_info(pollutant_id: str) -> Optional[PollutantInfo]:
    return POLLUTANTS_INFO.get(pollutant_id.lower())
