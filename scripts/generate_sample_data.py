#!/usr/bin/env python3
"""Generate sample registry data for manual validation.

Builds an in-memory ledger, optionally bootstraps it, registers synthetic parcels,
runs the transfer workflow on some of them, and writes the resulting
lands and their ledger history to JSON files in the local/ folder.
"""

import argparse
import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from land_registry.config import RegistryConfig
from land_registry.context import CallerIdentity, TransactionContext
from land_registry.contract import LandContract
from land_registry.generators import LandParcelGenerator
from land_registry.ledger import InMemoryLedger
from land_registry.logging import get_logger, setup_logging

logger = get_logger(__name__)


class TxClock:
    """Hands out sequential tx ids and timestamps one minute apart."""

    def __init__(self, start: datetime) -> None:
        self._now = start
        self._counter = 0

    def next(self, caller: CallerIdentity) -> TransactionContext:
        self._counter += 1
        self._now += timedelta(minutes=1)
        return TransactionContext(caller=caller, tx_id=f"tx-{self._counter:06d}", timestamp=self._now)


def save_json(data: Any, filename: str, output_dir: Path) -> None:
    """Save data to JSON file."""
    filepath = output_dir / filename
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    print(f"Saved {len(data)} records to {filepath}")


def main() -> None:
    """Generate sample lands and history files."""
    config = RegistryConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate sample land registry data")
    parser.add_argument(
        "--parcels",
        type=int,
        default=config.generator.num_parcels,
        help=f"Number of parcels to register (default: {config.generator.num_parcels})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.generator.seed if config.generator.seed is not None else 42,
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--transfer-every",
        type=int,
        default=3,
        help="Run a full transfer on every Nth parcel (default: 3)",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=project_root / "local",
        help="Directory for JSON output (default: local/)",
    )
    parser.add_argument(
        "--bootstrap",
        action=argparse.BooleanOptionalAction,
        default=config.bootstrap_on_start,
        help="Seed the ledger with the LAND0001 parcel first (default: BOOTSTRAP_LEDGER)",
    )
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)
    args.output_dir.mkdir(parents=True, exist_ok=True)

    auth = config.authorization
    registrar = CallerIdentity(
        client_id="Registrar_001",
        organization_id=auth.registrar_org_id,
        attributes={auth.role_attribute: auth.registrar_role},
    )

    ledger = InMemoryLedger()
    contract = LandContract.from_ledger(ledger, config)
    clock = TxClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
    generator = LandParcelGenerator(
        seed=args.seed,
        locale=config.generator.locale,
        start_index=2 if args.bootstrap else 1,
    )

    if args.bootstrap:
        contract.invoke(clock.next(registrar), "InitLedger")

    transfers = 0
    for i in range(args.parcels):
        parcel = generator.generate()
        contract.invoke(clock.next(registrar), "CreateLand", *parcel.as_args())

        if args.transfer_every > 0 and i % args.transfer_every == 0:
            seller = CallerIdentity(client_id=parcel.owner, organization_id="Org2MSP")
            buyer = generator.owner_id()
            contract.invoke(
                clock.next(seller),
                "InitiateTransfer",
                parcel.land_id,
                buyer,
                parcel.market_value,
                f"sha256:{generator.fake.sha256()}",
            )
            contract.invoke(clock.next(registrar), "ApproveTransfer", parcel.land_id)
            transfers += 1

    reader = clock.next(registrar)
    lands = json.loads(contract.invoke(reader, "GetAllLands"))
    history = {
        land["landId"]: json.loads(contract.invoke(reader, "GetHistory", land["landId"]))
        for land in lands
    }

    save_json(lands, "lands.json", args.output_dir)
    save_json(history, "history.json", args.output_dir)
    logger.info("Registered %d parcels, completed %d transfers", len(lands), transfers)


if __name__ == "__main__":
    main()
