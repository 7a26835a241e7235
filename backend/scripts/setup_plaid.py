#!/usr/bin/env python3
"""Plaid API setup script.

Validates Plaid API credentials by creating a link token with the same
request the API sends. Bank linking itself happens in the browser
(Plaid Link), not through this script.

Usage:
    1. Sign up at https://dashboard.plaid.com/
    2. Get your client_id and secret from the Keys page
    3. Run this script and follow the prompts
    4. Add the resulting env vars to your .env file
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Settings
from integrations.exceptions import ProviderError
from integrations.plaid_client import PlaidClient

ENVIRONMENT_CHOICES = {"1": "sandbox", "2": "production"}


def validate_credentials(client_id: str, secret: str, env: str) -> dict:
    """Validate Plaid credentials by creating a test link token.

    Args:
        client_id: Plaid client_id.
        secret: Plaid secret.
        env: Environment name (sandbox or production).

    Returns:
        The link token payload returned by Plaid.

    Raises:
        ProviderError: If the API call fails.
    """
    settings = Settings(
        PLAID_CLIENT_ID=client_id,
        PLAID_SECRET=secret,
        PLAID_ENVIRONMENT=env,
    )
    payload = PlaidClient(settings).create_link_token("setup-test")
    if not payload.get("link_token"):
        raise ProviderError("No link_token in response", "Plaid")
    return payload


def main():
    """Prompt for credentials and validate them."""
    print("Plaid API Setup")
    print("=" * 50)
    print()
    print("This script will validate your Plaid API credentials.")
    print()
    print("To get Plaid API credentials:")
    print("  1. Sign up at https://dashboard.plaid.com/")
    print("  2. Go to Developers > Keys")
    print("  3. Copy your client_id and secret")
    print()

    client_id = input("Enter your Plaid client_id: ").strip()
    if not client_id:
        print("Error: No client_id provided")
        sys.exit(1)

    secret = input("Enter your Plaid secret: ").strip()
    if not secret:
        print("Error: No secret provided")
        sys.exit(1)

    print()
    print("Choose environment:")
    print("  1. sandbox (for testing with fake data)")
    print("  2. production (for live use)")
    env_choice = input("Enter choice (1 or 2) [1]: ").strip() or "1"
    env = ENVIRONMENT_CHOICES.get(env_choice, "sandbox")

    print()
    print(f"Validating credentials against {env} environment...")

    try:
        validate_credentials(client_id, secret, env)
    except ProviderError as e:
        print(f"Error: {e}")
        print()
        print("Common issues:")
        print("  - Incorrect client_id or secret")
        print("  - Wrong environment selected")
        print("  - Transactions product not enabled for your Plaid team")
        sys.exit(1)

    print()
    print("Success! Add the following to your .env file:")
    print()
    print(f"PLAID_CLIENT_ID={client_id}")
    print(f"PLAID_SECRET={secret}")
    print(f"PLAID_ENVIRONMENT={env}")
    print()
    print("Keep these credentials secure - they provide access to")
    print("financial data via the Plaid API.")


if __name__ == "__main__":
    main()
