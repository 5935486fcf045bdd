#!/usr/bin/env python3
"""
Simple example of using the Arseeding SDK.
"""
import os
from arseeding_sdk import (
    ArseedingClient, ArseedingError, ArweaveItemSigner, ArweaveSigner, Everpay,
)

def main():
    """
    Demonstrate storing data and paying for it in one call.

    This example shows how to:
    1. Load an Arweave wallet
    2. Bind an everPay instance to it
    3. Send data to the bundler and pay the storage fee
    """
    KEYFILE = os.environ.get("ARWEAVE_KEYFILE")
    CURRENCY = os.environ.get("PAY_CURRENCY", "AR")

    if not KEYFILE:
        print("ERROR: ARWEAVE_KEYFILE environment variable is required")
        return

    signer = ArweaveSigner.from_keyfile(KEYFILE)
    print(f"Wallet: {signer.wallet_address()}")

    client = ArseedingClient(
        item_signer=ArweaveItemSigner(signer),
        everpay=Everpay(signer),
    )

    tags = {
        "Content-Type": "text/plain",
        "App-Name": "arseeding-python-example",
    }

    try:
        item_id = client.send_and_pay(CURRENCY, tags, b"hello arseeding")
        print(f"Stored and paid for item {item_id}")
    except ArseedingError as e:
        if e.order is not None:
            # The bundler holds the item; only payment is outstanding
            print(f"Item {e.order.item_id} accepted but payment failed: {e}")
            print(f"Outstanding fee: {e.order.fee} {e.order.currency} to {e.order.bundler}")
        else:
            print(f"Error storing data: {str(e)}")

if __name__ == "__main__":
    main()
