# file: seed_vectors.py

import requests
import json
import os
import random

# Index a week of hourly readings per city for similarity search
url = f"{os.getenv('FASTAPI_URL', 'http://localhost:8000')}/vector/index"
headers = {"Content-Type" : "application/json"}

BASELINES = {
    "New York City" : {"aqi" : 58, "pm25" : 13.2, "pm10" : 24.8, "no2" : 19, "o3" : 52},
    "Los Angeles" : {"aqi" : 75, "pm25" : 18.5, "pm10" : 32.1, "no2" : 24, "o3" : 68},
}
HOURS = 24 * 7

for location, baseline in BASELINES.items() :
    prev = dict(baseline)
    for i in range(HOURS) :
        # Random walk around the previous value, never below zero
        current = {key : max(0.0, value + random.uniform(-2.0, 2.0)) for key, value in prev.items()}

        data = {"id" : f"{location.lower().replace(' ', '-')}-{i}", "location" : location,
                "aqi" : int(round(current["aqi"])),
                "pollutants" : {key : round(current[key], 2) for key in ("pm25", "pm10", "no2", "o3")}}

        try :
            response = requests.post(url, headers = headers, data = json.dumps(data))
            if response.status_code == 200 :
                print(f"Indexed {data['id']}")
            else :
                print(f"Error for {data['id']}: {response.status_code} - {response.text}")
                if response.status_code == 503 :
                    raise SystemExit(1)
        except requests.exceptions.RequestException as e :
            print(f"Request failed for {data['id']}: {e}")

        prev = current
