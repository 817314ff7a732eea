# scripts/hubspot_check.py
# Sanity check your HubSpot portal/form/token by sending ONE real submission.
# Usage:
#   python scripts/hubspot_check.py you+test@example.com
# Creates (or updates) a contact in HubSpot, so use a test address.
import asyncio
import sys
import pathlib

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.config import HubSpotCredentials, get_settings
from app.errors import ConfigurationError
from app.integrations.hubspot import HubSpotFormsClient
from app.models import build_submission


async def _check(email: str) -> int:
    s = get_settings()
    try:
        client = HubSpotFormsClient(
            HubSpotCredentials.from_settings(s),
            base_url=s.HUBSPOT_API_BASE,
            timeout=s.HUBSPOT_TIMEOUT_S or 30,
        )
    except ConfigurationError as e:
        print("❌", e, "(check your .env)")
        return 1

    submission = build_submission([("email", email)], f"{s.SITE_NAME} Setup Check")
    print("POST", client.submit_url)
    try:
        resp = await client.submit(submission)
    except Exception as e:
        print("❌ Request error:", repr(e))
        return 3

    print("HTTP:", resp.status_code)
    if resp.ok:
        print("✅ Submission accepted.")
        return 0
    print("Body:", resp.data)
    print("❌ HubSpot rejected the submission.")
    return 2


def main():
    if len(sys.argv) != 2:
        print("usage: python scripts/hubspot_check.py <email>")
        sys.exit(64)
    sys.exit(asyncio.run(_check(sys.argv[1])))

if __name__ == "__main__":
    main()
