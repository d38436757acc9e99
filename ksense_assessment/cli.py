import argparse
import json
import logging

from .config import Settings
from .errors import AssessmentError, ConfigError
from .pagination import fetch_all_patients
from .submission import build_alert_sets, submit_assessment
from .transport import ApiClient

logger = logging.getLogger("ksense_assessment")


def run(settings, session=None, sleep=None, dry_run=False):
    kwargs = {"session": session}
    if sleep is not None:
        kwargs["sleep"] = sleep
    client = ApiClient(settings.base_url, settings.api_key, **kwargs)

    print("Fetching patients...")
    stage = "fetch"
    try:
        patients = fetch_all_patients(client, sleep=client.sleep)
        print(f"Got {len(patients)} patients")

        print("Scoring")
        alerts = build_alert_sets(patients)
        payload = alerts.to_payload()
        print("Counts:", alerts.counts())

        if dry_run:
            print(json.dumps(payload, indent=2))
            return None

        print("Submitting")
        stage = "submit"
        resp = submit_assessment(client, payload)
    except AssessmentError as exc:
        exc.stage = stage
        raise

    print("Server response:")
    print(json.dumps(resp, indent=2))
    return resp


def main(argv=None, session=None, sleep=None, environ=None):
    parser = argparse.ArgumentParser(description="Fetch patients, classify risk and submit alert lists")
    parser.add_argument("--api-key", help="API key (default: $YOUR_API_KEY)")
    parser.add_argument("--base-url", help="API base URL (default: $KSENSE_BASE_URL)")
    parser.add_argument("--dry-run", action="store_true", help="classify and print without submitting")
    parser.add_argument("--debug", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO, format="%(levelname)s: %(message)s")

    try:
        settings = Settings.from_env(environ, api_key=args.api_key, base_url=args.base_url)
    except ConfigError as exc:
        logger.error("config failed: %s", exc)
        return 1

    try:
        run(settings, session=session, sleep=sleep, dry_run=args.dry_run)
    except AssessmentError as exc:
        logger.error("%s failed: %s", getattr(exc, "stage", "run"), exc)
        return 1
    return 0
