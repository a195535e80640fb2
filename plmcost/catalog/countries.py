"""Supported countries and their currency display attributes."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Country:
    """A selectable country/currency pair.

    ``usd_rate`` is expressed as local-currency units per 1 USD.
    """

    name: str
    code: str
    currency_symbol: str
    usd_rate: float
    locale: str

    def to_usd(self, local_value: float) -> float:
        """Convert a local-currency amount to its USD equivalent."""
        if self.usd_rate <= 0:
            raise ValueError(f"Country {self.code} has no usable USD rate")
        return local_value / self.usd_rate


COUNTRIES: tuple[Country, ...] = (
    Country("United States (USD)", "USD", "$", 1, "en-US"),
    Country("Europe (EUR)", "EUR", "€", 0.92, "de-DE"),
    Country("Colombia (COP)", "COP", "$", 4000, "es-CO"),
    Country("Mexico (MXN)", "MXN", "$", 18, "es-MX"),
    Country("Spain (EUR)", "EUR", "€", 0.92, "es-ES"),
    Country("Argentina (ARS)", "ARS", "$", 900, "es-AR"),
    Country("Chile (CLP)", "CLP", "$", 950, "es-CL"),
    Country("Peru (PEN)", "PEN", "S/", 3.75, "es-PE"),
    Country("Guatemala (GTQ)", "GTQ", "Q", 7.8, "es-GT"),
    Country("Dominican Republic (DOP)", "DOP", "RD$", 59, "es-DO"),
    Country("Brazil (BRL)", "BRL", "R$", 5.1, "pt-BR"),
)

DEFAULT_CURRENCY = "USD"


def supported_currency_codes() -> frozenset[str]:
    """Every currency code reachable from the country table."""
    return frozenset(c.code for c in COUNTRIES)


def get_country(code: str) -> Country | None:
    """Look up a country by currency code.

    Several countries can share a code (EUR); the first table row wins.
    """
    for country in COUNTRIES:
        if country.code == code:
            return country
    return None
