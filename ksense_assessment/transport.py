import logging
import random
import time
from dataclasses import dataclass

import requests

from .errors import ExhaustedRetries, FatalHTTPError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES = frozenset({429, 500, 503})


@dataclass(frozen=True)
class RetryPolicy:
    retries: int
    base_delay: float
    jitter: float = 0.15
    timeout: float = 30

    @property
    def attempts(self):
        return self.retries + 1

    def delay(self, attempt, rand=random.uniform):
        return self.base_delay * 2 ** attempt + rand(0, self.jitter)


# fetches are flakier and cheap; submission backs off longer per attempt
FETCH_POLICY = RetryPolicy(retries=6, base_delay=0.25)
SUBMIT_POLICY = RetryPolicy(retries=3, base_delay=0.4)


class ApiClient:
    def __init__(self, base_url, api_key, session=None, sleep=time.sleep, rand=random.uniform):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.headers = {
            "x-api-key": api_key,
            "Accept": "application/json",
        }
        self.sleep = sleep
        self.rand = rand

    def url(self, path):
        return f"{self.base_url}{path}"

    def get_json(self, path, params=None, policy=FETCH_POLICY):
        return self.request_json("GET", self.url(path), policy, params=params)

    def post_json(self, path, body, policy=SUBMIT_POLICY):
        # json= sets Content-Type: application/json
        return self.request_json("POST", self.url(path), policy, json=body)

    def request_json(self, method, url, policy, **kwargs):
        last_status = last_body = last_exc = None

        for attempt in range(policy.attempts):
            try:
                r = self.session.request(
                    method, url, headers=self.headers, timeout=policy.timeout, **kwargs
                )
            except requests.RequestException as exc:
                last_status, last_body, last_exc = None, None, exc
                cause = f"{type(exc).__name__}: {exc}"
            else:
                if r.status_code in RETRYABLE_STATUSES:
                    last_status, last_body, last_exc = r.status_code, r.text, None
                    cause = f"HTTP {r.status_code}"
                elif not 200 <= r.status_code < 300:
                    raise FatalHTTPError(r.status_code, r.text, url=url)
                else:
                    try:
                        return r.json()
                    except ValueError as exc:
                        last_status, last_body, last_exc = None, None, exc
                        cause = f"invalid JSON body: {exc}"

            if attempt < policy.retries:
                wait = policy.delay(attempt, self.rand)
                logger.warning(
                    "%s %s attempt %d/%d failed (%s); retrying in %.2fs",
                    method, url, attempt + 1, policy.attempts, cause, wait,
                )
                self.sleep(wait)

        raise ExhaustedRetries(
            url, policy.attempts, status=last_status, body=last_body, cause=cause
        ) from last_exc
