"""Instrument registry: the fixed set of tradable instruments.

The registry is a read-only mapping from symbol to ``Instrument``. Membership
is fixed when it is seeded; the only way to change it is ``replace_all``,
which swaps every instrument for an updated copy with the same symbol and is
used by the day-advance step alone.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from models.config import InstrumentConfig
from models.instrument import HISTORY_LIMIT, Instrument


class InstrumentRegistry(Mapping[str, Instrument]):
    """Immutable symbol -> ``Instrument`` mapping with fixed membership."""

    def __init__(self, instruments: Mapping[str, Instrument]) -> None:
        for symbol, instrument in instruments.items():
            if symbol != instrument.symbol:
                raise ValueError(
                    f"Registry key '{symbol}' does not match instrument symbol "
                    f"'{instrument.symbol}'."
                )
        self._instruments = dict(instruments)

    def __getitem__(self, symbol: str) -> Instrument:
        return self._instruments[symbol]

    def __iter__(self) -> Iterator[str]:
        return iter(self._instruments)

    def __len__(self) -> int:
        return len(self._instruments)

    def __repr__(self) -> str:
        return f"InstrumentRegistry({', '.join(self._instruments)})"

    def get(self, symbol: str, default: Instrument | None = None) -> Instrument | None:
        """Look up *symbol*; unknown symbols yield ``default`` (``None``)."""
        return self._instruments.get(symbol, default)

    def sectors(self) -> list[str]:
        """Distinct sectors, in first-seen order."""
        return list(dict.fromkeys(i.sector for i in self._instruments.values()))

    def replace_all(self, instruments: Iterable[Instrument]) -> InstrumentRegistry:
        """Return a new registry holding *instruments* in place of the current ones.

        Raises ``ValueError`` if the symbols differ from the current set:
        instruments cannot be added or removed after seeding.
        """
        updated = {i.symbol: i for i in instruments}
        if updated.keys() != self._instruments.keys():
            added = sorted(updated.keys() - self._instruments.keys())
            missing = sorted(self._instruments.keys() - updated.keys())
            raise ValueError(
                f"Registry membership is fixed (added: {added or 'none'}, "
                f"missing: {missing or 'none'})."
            )
        # Keep seeding order rather than the order of the replacements.
        return InstrumentRegistry({s: updated[s] for s in self._instruments})


def seed_registry(configs: Iterable[InstrumentConfig]) -> InstrumentRegistry:
    """Build the startup registry from static instrument configuration.

    The seed history always ends with the starting price and is cut to the
    last ``HISTORY_LIMIT`` entries. ``change`` comes from the last two
    history points. Duplicate symbols raise ``ValueError``.
    """
    instruments: dict[str, Instrument] = {}
    for cfg in configs:
        if cfg.symbol in instruments:
            raise ValueError(f"Duplicate instrument symbol '{cfg.symbol}'.")

        price = round(cfg.price, 2)
        history = [round(p, 2) for p in cfg.history]
        if not history or history[-1] != price:
            history.append(price)
        history = history[-HISTORY_LIMIT:]

        instruments[cfg.symbol] = Instrument(
            symbol=cfg.symbol,
            name=cfg.name,
            sector=cfg.sector,
            price=price,
            history=tuple(history),
        )
    return InstrumentRegistry(instruments)
