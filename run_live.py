# eventbridge-to-slack/run_live.py
"""
Runs the notifier handler in-process against a sample event, using the
settings from your environment or a .env file. With SLACK_CHANNEL and
SLACK_CLIENT_SECRET set this posts a REAL message to Slack.
"""
import argparse
import json
import os

from dotenv import load_dotenv

SAMPLE_EVENT_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "tests", "events", "ecr_image_action.json")


def run_live(event_path: str):
    """Executes the Lambda handler with the event stored at `event_path`."""
    print("--- Starting LIVE Run of eventbridge_to_slack Lambda ---")

    # The app module builds its server on import, so settings must be loaded first
    from lambdas.eventbridge_to_slack.app import handler

    with open(event_path, 'r') as f:
        event = json.load(f)

    try:
        result = handler(event, None)
    except Exception as e:
        print(f"\n An error occurred while handling the event: {e}")
        return

    print("\n--- Final Output from Lambda: ---")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    load_dotenv()

    parser = argparse.ArgumentParser(description="Invoke the notifier handler locally.")
    parser.add_argument("event_file", nargs="?", default=SAMPLE_EVENT_PATH, help="Path to an event JSON file.")
    args = parser.parse_args()
    run_live(args.event_file)
