"""
keyrecovery: Basic Usage Example

Splits a spending/viewing key pair across 20 guardians, stores each share
encrypted on disk, then gathers 15 of them back and recovers the keys.
"""

import shutil
import sys
from dataclasses import replace
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from keyrecovery import split, recover, random_keys, TamperDetected, DEFAULT_THRESHOLD, DEFAULT_NUM_SHARES
from keyrecovery.guardians import LocalGuardian, distribute, collect


def main():
    print("=" * 50)
    print(f"  keyrecovery, {DEFAULT_THRESHOLD}-of-{DEFAULT_NUM_SHARES} guardians")
    print("=" * 50)

    spending, viewing = random_keys()
    print(f"\nSpending key: {spending}")
    print(f"Viewing key:  {viewing}")

    shares = split(DEFAULT_THRESHOLD, DEFAULT_NUM_SHARES, spending, viewing)
    print(f"\nSplit into {len(shares)} shares")

    guardians = [
        LocalGuardian(
            storage_dir=f"./example-guardians/{i}",
            passphrase=f"guardian-{i}-passphrase",
            guardian_id=f"guardian-{i}",
            iterations=10_000,
        )
        for i in range(DEFAULT_NUM_SHARES)
    ]
    report = distribute(shares, guardians)
    stored = sum(1 for g in report["guardians"] if g["distributed"])
    print(f"Stored {stored} shares with guardians")

    # One more than the threshold, so tampering would be detected
    collected = collect(guardians, limit=DEFAULT_THRESHOLD + 1)
    print(f"Collected {len(collected)} shares")

    recovered = recover(DEFAULT_THRESHOLD, collected)
    print(f"\nRecovered spending key: {recovered[0]}")
    print(f"Recovered viewing key:  {recovered[1]}")
    print(f"  [{'OK' if recovered == (spending, viewing) else 'MISMATCH'}]")

    # Corrupt one share and try again
    print("\nAttempting recovery with one altered share...")
    collected[0] = replace(collected[0], spending_eval="1")
    try:
        recover(DEFAULT_THRESHOLD, collected)
        print("  ERROR: Should have failed!")
    except TamperDetected:
        print("  Correctly rejected, the two interpolations disagree")

    shutil.rmtree("./example-guardians", ignore_errors=True)
    print("\nCleaned up example files.")


if __name__ == "__main__":
    main()
