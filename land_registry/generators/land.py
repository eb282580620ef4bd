"""Synthetic land parcels for bootstrap and sample data."""

from dataclasses import astuple, dataclass

from land_registry.generators.base import BaseGenerator


@dataclass
class ParcelRequest:
    """Arguments of one ``CreateLand`` call, in invocation order.

    Numeric fields are strings, as the transport delivers them.
    """

    land_id: str
    title_number: str
    land_type: str
    ownership_type: str
    owner: str
    owner_name: str
    area: str
    unit: str
    survey_number: str
    mutation_number: str
    location: str
    lat: str
    long: str
    north: str
    south: str
    east: str
    west: str
    market_value: str
    doc_hash: str

    def as_args(self) -> list[str]:
        """Positional arguments for ``LandContract.invoke(tx, "CreateLand", ...)``."""
        return list(astuple(self))


class LandParcelGenerator(BaseGenerator):
    """Generate synthetic parcels located in India."""

    LAND_TYPES = ["Residential", "Agricultural", "Commercial", "Industrial"]
    OWNERSHIP_TYPES = ["Freehold", "Leasehold"]
    BOUNDARY_FEATURES = ["Road", "River", "Canal", "Railway Line", "Forest", "Public Land"]

    # Mainland India bounding box (decimal degrees)
    LAT_RANGE = (8.0, 32.0)
    LONG_RANGE = (69.0, 89.0)

    # Per square foot, INR
    RATE_RANGE = {
        "Residential": (2000, 9000),
        "Agricultural": (50, 400),
        "Commercial": (5000, 20000),
        "Industrial": (1500, 6000),
    }

    def __init__(self, seed: int | None = None, locale: str = "en_IN", start_index: int = 1) -> None:
        super().__init__(seed, locale)
        self._next_index = start_index

    def owner_id(self) -> str:
        """Aadhaar-style owner identity string."""
        return f"Aadhar_{self.rng.randint(10_000_000, 99_999_999)}"

    def generate(self, owner: str | None = None) -> ParcelRequest:
        """Generate one parcel.

        Parameters
        ----------
        owner : str | None
            Owner identity; a fresh one is drawn when omitted.

        Returns
        -------
        ParcelRequest
            ``CreateLand`` arguments.
        """
        index = self._next_index
        self._next_index += 1

        land_type = self.rng.choice(self.LAND_TYPES)
        area = self.rng.randint(500, 20_000)
        low, high = self.RATE_RANGE[land_type]
        market_value = area * self.rng.randint(low, high)
        sides = self.rng.sample(self.BOUNDARY_FEATURES, 2) + [
            f"Plot {self.rng.randint(1, 400)}",
            f"Plot {self.rng.randint(1, 400)}",
        ]
        self.rng.shuffle(sides)

        return ParcelRequest(
            land_id=f"LAND{index:04d}",
            title_number=f"TN-{self.rng.randint(100_000, 999_999)}",
            land_type=land_type,
            ownership_type=self.rng.choice(self.OWNERSHIP_TYPES),
            owner=owner or self.owner_id(),
            owner_name=self.fake.name(),
            area=str(area),
            unit="sq.ft",
            survey_number=f"SV-{self.rng.randint(1000, 9999)}",
            mutation_number=f"MUT-{self.rng.randint(1000, 9999)}",
            location=f"{self.fake.city()}, {self.fake.state()}, {self.fake.postcode()}",
            lat=f"{self.rng.uniform(*self.LAT_RANGE):.4f}",
            long=f"{self.rng.uniform(*self.LONG_RANGE):.4f}",
            north=sides[0],
            south=sides[1],
            east=sides[2],
            west=sides[3],
            market_value=str(market_value),
            doc_hash=f"sha256:{self.fake.sha256()}",
        )
