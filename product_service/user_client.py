import logging
from urllib.parse import quote

import requests

from common.errors import UpstreamUnavailable

logger = logging.getLogger("product_service")


class UserClient:
    """Blocking lookup against the user service's GET /users/<email>."""

    def __init__(self, base_url, timeout=5.0):
        self.base_url = base_url
        self.timeout = timeout

    def user_url(self, email):
        return self.base_url + quote(email, safe="@")

    def get_user(self, email):
        if not self.base_url:
            logger.error("USER_SERVICE_URL is not set")
            raise UpstreamUnavailable("failed to get user data")

        url = self.user_url(email)
        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout:
            logger.error(f"user service timed out after {self.timeout}s ({url})")
            raise UpstreamUnavailable("failed to get user data")
        except requests.exceptions.RequestException as e:
            logger.error(f"user service unreachable ({url}): {e}")
            raise UpstreamUnavailable("failed to get user data")

        if resp.status_code != 200:
            logger.warning(f"user service answered {resp.status_code} for {email}")
            raise UpstreamUnavailable("failed to get user data")

        try:
            data = resp.json()
        except ValueError:
            logger.error(f"user service sent an undecodable body for {email}")
            raise UpstreamUnavailable("failed to get user data")
        if not isinstance(data, dict):
            logger.error(f"user service sent a non-object body for {email}")
            raise UpstreamUnavailable("failed to get user data")

        return {
            "name": data.get("name", ""),
            "email": data.get("email", ""),
            "age": data.get("age", 0),
        }
