# cli/send_sample_event.py
import os
import json
import argparse
import requests
from dotenv import load_dotenv

# Load environment variables from a .env file for local testing
load_dotenv()

# The Lambda runtime interface emulator listens here when the image runs locally
DEFAULT_ENDPOINT = "http://localhost:9000/2015-03-31/functions/function/invocations"
INVOKE_ENDPOINT = os.environ.get("LAMBDA_INVOKE_URL", DEFAULT_ENDPOINT)
SAMPLE_EVENT_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "tests", "events", "ecr_image_action.json")


def load_event(path: str) -> dict:
    """Reads an EventBridge event from a JSON file."""
    with open(path, 'r') as f:
        return json.load(f)


def send_event(endpoint: str, event: dict) -> dict | None:
    """
    Posts the event to a locally running function and returns its response.
    """
    print(f"--- Sending event '{event.get('detail-type', 'unknown')}' to {endpoint} ---")
    try:
        response = requests.post(endpoint, json=event, timeout=10)
        response.raise_for_status()
    except requests.exceptions.RequestException as e:
        print(f"\n❌ Failed to send event.")
        print(f"Error: {e}")
        return None

    print("\n✅ Success! Event delivered to the function.")
    print(f"Status Code: {response.status_code}")
    print(f"Response Body: {response.text}")
    return response.json()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Send a sample EventBridge event to a local Lambda container.")
    parser.add_argument("event_file", nargs="?", default=SAMPLE_EVENT_PATH, help="Path to an event JSON file.")
    parser.add_argument("--endpoint", default=INVOKE_ENDPOINT, help="Lambda invoke URL.")
    args = parser.parse_args()

    send_event(args.endpoint, load_event(args.event_file))
