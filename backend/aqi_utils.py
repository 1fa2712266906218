# file: backend/aqi_utils.py

from typing import Any, Dict, List

from backend.models import AQICategory, HealthAdvisory

AQI_CATEGORIES: List[AQICategory] = [
    AQICategory(
        level="Good",
        color="#22c55e",
        bg_color="#dcfce7",
        range=(0, 50),
        health_implications="Air quality is satisfactory, and air pollution poses little or no risk.",
        cautionary_statement="None",
    ),
    AQICategory(
        level="Moderate",
        color="#eab308",
        bg_color="#fef9c3",
        range=(51, 100),
        health_implications="Air quality is acceptable. However, there may be a risk for some people, "
                            "particularly those who are unusually sensitive to air pollution.",
        cautionary_statement="Unusually sensitive people should consider limiting prolonged outdoor exertion.",
    ),
    AQICategory(
        level="Unhealthy for Sensitive Groups",
        color="#f97316",
        bg_color="#fed7aa",
        range=(101, 150),
        health_implications="Members of sensitive groups may experience health effects. "
                            "The general public is less likely to be affected.",
        cautionary_statement="Children, elderly, and people with respiratory or heart conditions "
                             "should limit prolonged outdoor exertion.",
    ),
    AQICategory(
        level="Unhealthy",
        color="#ef4444",
        bg_color="#fecaca",
        range=(151, 200),
        health_implications="Some members of the general public may experience health effects; "
                            "members of sensitive groups may experience more serious health effects.",
        cautionary_statement="Everyone should limit prolonged outdoor exertion. "
                             "Sensitive groups should avoid outdoor activities.",
    ),
    AQICategory(
        level="Very Unhealthy",
        color="#a855f7",
        bg_color="#e9d5ff",
        range=(201, 300),
        health_implications="Health alert: The risk of health effects is increased for everyone.",
        cautionary_statement="Everyone should avoid prolonged outdoor exertion. Sensitive groups should remain indoors.",
    ),
    AQICategory(
        level="Hazardous",
        color="#7f1d1d",
        bg_color="#fca5a5",
        range=(301, 500),
        health_implications="Health warning of emergency conditions: everyone is more likely to be affected.",
        cautionary_statement="Everyone should avoid all outdoor exertion. Stay indoors with windows closed.",
    ),
]


def get_aqi_category(aqi: float) -> AQICategory:
    """Return the category whose closed range contains aqi, Hazardous otherwise."""
    for category in AQI_CATEGORIES:
        low, high = category.range
        if low <= aqi <= high:
            return category
    return AQI_CATEGORIES[-1]


def get_aqi_color(aqi: float) -> str:
    return get_aqi_category(aqi).color


def _advisory(icon: str, title: str, content: str, color: str, priority: str) -> HealthAdvisory:
    return HealthAdvisory(icon=icon, title=title, content=content, color=color, priority=priority)


def get_health_advisories(aqi: float) -> List[HealthAdvisory]:
    """Advice cards for the band the AQI falls into."""
    if aqi <= 50:
        return [
            _advisory("check", "Safe for Everyone",
                      "Air quality is excellent. Perfect day for outdoor activities and exercise.",
                      "#22c55e", "low"),
        ]

    if aqi <= 100:
        return [
            _advisory("info", "Generally Safe",
                      "Air quality is acceptable for most people. Unusually sensitive individuals "
                      "should watch for symptoms.",
                      "#eab308", "low"),
            _advisory("users", "Sensitive Groups",
                      "People with asthma or respiratory conditions should monitor their symptoms "
                      "and have medication ready.",
                      "#eab308", "medium"),
        ]

    if aqi <= 150:
        return [
            _advisory("alert", "Sensitive Groups Alert",
                      "Children, elderly, and people with asthma or heart disease should limit "
                      "prolonged outdoor activities.",
                      "#f97316", "high"),
            _advisory("heart", "Asthma & Respiratory",
                      "Keep rescue inhalers accessible. Consider using air purifiers indoors. "
                      "Close windows during peak pollution hours.",
                      "#f97316", "high"),
            _advisory("activity", "Exercise Caution",
                      "Reduce intensity of outdoor exercise. Consider moving workouts indoors or to "
                      "early morning hours.",
                      "#f97316", "medium"),
        ]

    if aqi <= 200:
        return [
            _advisory("alert-triangle", "Health Alert",
                      "Everyone should limit prolonged outdoor exertion. Sensitive groups should avoid "
                      "outdoor activities entirely.",
                      "#ef4444", "high"),
            _advisory("heart", "Asthma & Heart Conditions",
                      "Stay indoors with windows closed. Use air purifiers with HEPA filters. Have "
                      "medications readily available. Seek medical attention if symptoms worsen.",
                      "#ef4444", "high"),
            _advisory("users", "Children & Elderly",
                      "Keep children and elderly indoors. Cancel outdoor activities and sports. Monitor "
                      "for coughing, difficulty breathing, or eye irritation.",
                      "#ef4444", "high"),
            _advisory("home", "Indoor Air Quality",
                      "Keep all windows and doors closed. Run air conditioning with clean filters. Avoid "
                      "using candles, fireplaces, or other indoor pollution sources.",
                      "#ef4444", "medium"),
        ]

    # Very Unhealthy or Hazardous
    return [
        _advisory("alert-octagon", "EMERGENCY: Stay Indoors",
                  "Health emergency conditions. Everyone should avoid all outdoor activities. Stay "
                  "indoors with windows and doors sealed.",
                  "#7f1d1d", "high"),
        _advisory("heart", "Medical Alert",
                  "People with respiratory or heart conditions should remain indoors and minimize "
                  "physical activity. Have emergency medications ready. Contact healthcare provider "
                  "if experiencing symptoms.",
                  "#7f1d1d", "high"),
        _advisory("users", "Protect Vulnerable Groups",
                  "Children, elderly, pregnant women, and those with chronic conditions must stay "
                  "indoors. Create a clean air room with air purifiers running continuously.",
                  "#7f1d1d", "high"),
        _advisory("home", "Seal Your Home",
                  "Close all windows and doors. Seal gaps with towels. Run HVAC with clean filters on "
                  "recirculate mode. Use multiple air purifiers if available.",
                  "#7f1d1d", "high"),
        _advisory("shield", "If You Must Go Outside",
                  "Wear N95 or P100 respirator masks (not cloth or surgical masks). Limit time outdoors "
                  "to absolute minimum. Avoid any physical exertion.",
                  "#7f1d1d", "high"),
    ]


def get_sensitive_population_alerts(aqi: float) -> List[str]:
    if aqi <= 50:
        return []

    if aqi <= 100:
        return ["People with asthma should monitor symptoms"]

    if aqi <= 150:
        return [
            "Children should limit outdoor play",
            "Elderly should reduce outdoor activities",
            "Asthmatics should carry inhalers",
            "Outdoor workers should take frequent breaks",
        ]

    if aqi <= 200:
        return [
            "Children should stay indoors",
            "Elderly should avoid going outside",
            "Asthmatics should stay indoors with medication ready",
            "Outdoor workers should wear protective masks",
            "Pregnant women should limit outdoor exposure",
        ]

    return [
        "All children must remain indoors",
        "Elderly must not go outside",
        "Asthmatics should have emergency plan ready",
        "All outdoor work should be suspended",
        "Pregnant women must stay indoors",
        "Anyone with heart conditions should minimize activity",
    ]


def get_health_recommendations(aqi: float) -> Dict[str, Any]:
    """Short recommendation list the chat assistant hands back to the model."""
    if aqi <= 50:
        return {
            "level": "Good",
            "recommendations": ["Air quality is satisfactory", "Outdoor activities are safe", "No health concerns"],
        }
    if aqi <= 100:
        return {
            "level": "Moderate",
            "recommendations": [
                "Unusually sensitive people should limit prolonged outdoor exertion",
                "General public can enjoy outdoor activities",
            ],
        }
    if aqi <= 150:
        return {
            "level": "Unhealthy for Sensitive Groups",
            "recommendations": [
                "Sensitive groups should reduce prolonged outdoor exertion",
                "Children and elderly should limit outdoor activities",
            ],
        }
    return {
        "level": "Unhealthy",
        "recommendations": [
            "Everyone should avoid prolonged outdoor exertion",
            "Stay indoors if possible",
            "Use air purifiers",
        ],
    }
