import logging
import time

from .transport import FETCH_POLICY

logger = logging.getLogger(__name__)

PAGE_LIMIT = 20  # max allowed by the API
PAGE_PACING = 0.12


def extract_records(body):
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, list):
        return []
    return [item for item in data if isinstance(item, dict) and "patient_id" in item]


def fetch_all_patients(client, limit=PAGE_LIMIT, pacing=PAGE_PACING, policy=FETCH_POLICY, sleep=time.sleep):
    """Fetch every page of ``/patients``.

    Stops at the first page with no patient records. The ``pagination``
    block the API returns is not reliable and is only logged.
    """
    patients = []
    page = 1
    while True:
        body = client.get_json("/patients", params={"page": page, "limit": limit}, policy=policy)
        records = extract_records(body)
        if isinstance(body, dict):
            logger.debug("page %d: %d records, pagination=%r", page, len(records), body.get("pagination"))
        if not records:
            break
        patients.extend(records)
        page += 1
        sleep(pacing)
    return patients
