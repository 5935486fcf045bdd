#!/usr/bin/env python3
"""
Example of read-only queries against the bundler and everPay.
"""
import sys
from arseeding_sdk import ArseedingClient, EverpayClient, NetworkConfig

def main():
    network = sys.argv[1] if len(sys.argv) > 1 else "mainnet"
    client = ArseedingClient(url=NetworkConfig.get_arseeding_url(network))
    everpay = EverpayClient(url=NetworkConfig.get_everpay_url(network))

    print(f"Bundler address: {client.get_bundler().bundler}")

    info = everpay.info()
    print(f"everPay fee recipient: {info.fee_recipient}")
    for token in info.token_list:
        fee = client.get_bundle_fee(1024, token.symbol)
        print(f"  {token.symbol:<8} 1 KiB costs {fee.final_fee} (decimals {fee.decimals})")

if __name__ == "__main__":
    main()
