"""
factorium.units.registry
========================

A structured, extensible, and testable units registry for factorium.

Key points
----------
- Encapsulates lookup state in a `UnitsRegistry` class (thread-safe).
- Data-driven registration of the catalog in `factorium.units.catalog`.
- Symbols are case-sensitive (`m` is meter, `M` is mega); spelled-out names and
  their aliases are case-insensitive and accept a plural trailing `s`.
- Lazy, memoized synthesis of prefixed units (`km`, `kilometres`) with
  anti-stacking checks and a non-prefixable list.
- Unknown identifiers are rejected with `UnitFormatError`.
- Clear public API: `register`, `register_symbol`, `register_alias`, `get`,
  `try_get`, `has`, `all`, `as_namespace`.
"""
from __future__ import annotations

import logging
import re
import threading
import unicodedata
from typing import ClassVar, Dict, Iterable, Mapping, Optional, Tuple

from factorium.core.errors import Result, UnitFormatError
from factorium.core.factor import Factor, NumberFactor, multiply
from factorium.core.units import Units
from factorium.units.catalog import CATALOG, PREFIXES, Prefix
from factorium.units.parser import parse_units_expr

logger = logging.getLogger(__name__)

# Prefix spellings by descending length for robust matching
_PREFIX_SYMBOLS_DESC: Tuple[Tuple[str, Prefix], ...] = tuple(
    sorted(((s, p) for p in PREFIXES for s in p.symbols), key=lambda sp: len(sp[0]), reverse=True)
)
_PREFIX_NAMES_DESC: Tuple[Tuple[str, Prefix], ...] = tuple(
    sorted(((p.name, p) for p in PREFIXES), key=lambda sp: len(sp[0]), reverse=True)
)

# A single identifier; anything else is handed to the expression parser.
_ATOM_RE = re.compile(r"[^\W\d]\w*")


def normalize_symbol(s: str) -> str:
    """Normalize user-provided unit symbols.

    Rules:
    - Strip surrounding whitespace.
    - Unicode normalize to NFC (the ohm sign becomes Greek capital omega).
    - Leave case as-is; case folding applies to spelled-out names only.
    """
    if not s:
        return s
    return unicodedata.normalize("NFC", s.strip())


# ---------------------------------------------------------------------------
# Units registry
# ---------------------------------------------------------------------------
class UnitsRegistry:
    """Thread-safe registry mapping unit symbols and names to factors.

    Atomic spellings are resolved here; compound expressions (like "m/s^2")
    are delegated to `factorium.units.parser`, which calls back into `get`
    for every name it meets.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._units: Dict[str, Factor] = {}       # canonical name -> factor
        self._symbols: Dict[str, str] = {}        # exact symbol -> canonical name
        self._names: Dict[str, str] = {}          # casefolded name/alias -> canonical name
        self._non_prefixable: set[str] = set()
        self._synthesized: Dict[str, Factor] = {}

    def __contains__(self, symbol: str) -> bool:
        return self.has(symbol)

    def set_non_prefixable(self, names: Iterable[str]) -> None:
        """Mark units (by canonical name) that must not accept SI prefixes (e.g. 'minute')."""
        with self._lock:
            self._non_prefixable = {self._canonical(n) for n in names}
            self._synthesized.clear()

    def is_non_prefixable(self, symbol: str) -> bool:
        name = self._lookup_unprefixed(normalize_symbol(symbol))
        return name is not None and name in self._non_prefixable

    # -------------------------- public API ---------------------------------
    def register(
        self,
        name: str,
        factor: Factor,
        symbol: Optional[str] = None,
        aliases: Iterable[str] = (),
        prefixable: bool = True,
        replace: bool = False,
    ) -> None:
        """Register (or overwrite if replace is True) a unit under its canonical name.

        `name` and `aliases` are spelled-out forms matched case-insensitively;
        `symbol` is matched exactly. Use `register_alias`/`register_symbol` to
        add more spellings later.
        """
        if not isinstance(factor, Factor):
            raise TypeError(f"Expected a Factor, got {type(factor).__name__}")
        name = normalize_symbol(name)
        if not name:
            raise ValueError("Unit name must not be empty.")
        self._check_reserved(name)
        aliases = tuple(aliases)

        with self._lock:
            key = name.casefold()
            if not replace:
                # validate every spelling before mutating
                taken = [n for n in (key, *(normalize_symbol(a).casefold() for a in aliases))
                         if n in self._names]
                if name in self._units or taken:
                    raise ValueError(
                        f"Cannot register unit '{name}': "
                        f"the name or alias {(taken or [name])[0]!r} already exists."
                    )
                if symbol is not None and normalize_symbol(symbol) in self._symbols:
                    raise ValueError(
                        f"Cannot register unit '{name}': "
                        f"the symbol '{symbol}' is already taken."
                    )

            self._units[name] = factor
            self._names[key] = name
            if prefixable:
                self._non_prefixable.discard(name)
            else:
                self._non_prefixable.add(name)
            self._synthesized.clear()

            if symbol is not None:
                self.register_symbol(symbol, name, replace=replace)
            for alias in aliases:
                self.register_alias(alias, name, replace=replace)

        logger.debug("registered unit %r as %s", name, factor)

    def register_symbol(self, symbol: str, canonical: str, replace: bool = False) -> None:
        """Add an exact (case-sensitive) symbol for a registered unit."""
        key = normalize_symbol(symbol)
        if not key:
            raise ValueError("Symbol must not be empty.")
        self._check_reserved(key)
        with self._lock:
            target = self._canonical(canonical)
            if not replace and self._symbols.get(key, target) != target:
                raise ValueError(
                    f"Cannot register symbol '{symbol}': "
                    f"it already refers to '{self._symbols[key]}'."
                )
            self._symbols[key] = target
            self._synthesized.clear()

    def register_alias(self, alias: str, canonical: str, replace: bool = False) -> None:
        """Add a spelled-out alias (case-insensitive, plural tolerant)."""
        key = normalize_symbol(alias).casefold()
        if not key:
            raise ValueError("Alias must not be empty.")
        self._check_reserved(key)
        with self._lock:
            target = self._canonical(canonical)
            if not replace and self._names.get(key, target) != target:
                raise ValueError(
                    f"Cannot register alias '{alias}': "
                    f"it already refers to '{self._names[key]}'."
                )
            self._names[key] = target
            self._synthesized.clear()

    def has(self, symbol: str) -> bool:
        try:
            self.get(symbol)
            return True
        except UnitFormatError:
            return False

    def get(self, symbol: str) -> Factor:
        """Lookup a unit by symbol or name. If missing, try to synthesize via SI prefix.

        Compound expressions ('kg*m/s^2') are parsed against this registry.

        Raises `UnitFormatError` if empty, malformed or unknown.
        """
        if not isinstance(symbol, str):
            raise TypeError(f"Unit symbol must be a string, got {type(symbol).__name__}")

        sym = normalize_symbol(symbol)
        if not _ATOM_RE.fullmatch(sym):
            # empty, numeric or composed expression
            return parse_units_expr(symbol, self)

        with self._lock:
            name = self._lookup_unprefixed(sym)
            if name is not None:
                return self._units[name]

            synthesized = self._synthesized.get(sym)
            if synthesized is not None:
                return synthesized

            synthesized = self._try_synthesize_prefixed(sym)
            if synthesized is not None:
                return synthesized

        raise UnitFormatError(f"Unknown unit symbol: {symbol}")

    def try_get(self, symbol: str) -> Result[Factor]:
        return Result.capture(self.get, symbol)

    def all(self) -> Mapping[str, Factor]:
        with self._lock:
            return dict(self._units)

    def symbols(self) -> Mapping[str, str]:
        with self._lock:
            return dict(self._symbols)

    def as_namespace(self) -> UnitNamespace:
        return UnitNamespace(self)

    # ------------------------- internals -----------------------------------
    @staticmethod
    def _check_reserved(key: str) -> None:
        if key in getattr(UnitNamespace, "_reserved_names", ()):
            raise ValueError(
                f"Cannot register '{key}': "
                "name conflicts with UnitNamespace attribute/method."
            )

    def _canonical(self, name: str) -> str:
        found = self._lookup_unprefixed(normalize_symbol(name))
        if found is None:
            raise ValueError(f"Unknown unit '{name}'")
        return found

    def _lookup_name(self, text: str) -> Optional[str]:
        folded = text.casefold()
        name = self._names.get(folded)
        if name is None and len(folded) > 1 and folded.endswith("s"):
            name = self._names.get(folded[:-1])
        return name

    def _lookup_unprefixed(self, text: str) -> Optional[str]:
        name = self._symbols.get(text)
        if name is not None:
            return name
        return self._lookup_name(text)

    def _try_synthesize_prefixed(self, sym: str) -> Optional[Factor]:
        # symbol prefix + unit symbol: 'km', 'µs', 'dam'
        for spelling, prefix in _PREFIX_SYMBOLS_DESC:
            rest = sym[len(spelling):]
            if not rest or not sym.startswith(spelling):
                continue
            base = self._symbols.get(rest)
            if base is not None and base not in self._non_prefixable:
                return self._remember(sym, prefix.factor, base)

        # prefix name + unit name: 'kilometre', 'Milliseconds'
        folded = sym.casefold()
        for spelling, prefix in _PREFIX_NAMES_DESC:
            rest = folded[len(spelling):]
            if not rest or not folded.startswith(spelling):
                continue
            base = self._lookup_name(rest)
            if base is not None and base not in self._non_prefixable:
                return self._remember(sym, prefix.factor, base)
        return None

    def _remember(self, sym: str, prefix: NumberFactor, base: str) -> Factor:
        factor = multiply(prefix, self._units[base])
        self._synthesized[sym] = factor
        logger.debug("synthesized prefixed unit %r = %s", sym, factor)
        return factor


class UnitNamespace:
    """Attribute-style access to a registry: `u.km`, `u("m/s")`, `"m" in u`."""

    _reserved_names: ClassVar[set[str]] = set()

    def __init__(self, reg: "UnitsRegistry") -> None:
        self._reg = reg

    def __contains__(self, spec: str) -> bool:
        return self._reg.has(spec)

    def define(
        self,
        name: str,
        scale: "float|int",
        reference: "Units | Factor",
        symbol: Optional[str] = None,
        replace: bool = False,
    ) -> Units:
        """Register `name` as `scale` times `reference` and return it as Units.

        >>> u.define("foot", 0.3048, u.m, symbol="ft")
        """
        if isinstance(reference, Units):
            reference = reference.factor
        factor = multiply(NumberFactor(scale), reference)
        self._reg.register(name, factor, symbol=symbol, replace=replace)
        return Units(factor)

    def __call__(self, spec: "str") -> Units:
        return Units(self._reg.get(spec))

    def __getattr__(self, name: "str") -> Units:
        if name.startswith("__"):
            raise AttributeError(name)
        try:
            return Units(self._reg.get(name))
        except UnitFormatError as e:
            # Unknown symbol should look like a missing attribute
            raise AttributeError(name) from e

    def __dir__(self) -> list[str]:
        """List all available unit symbols and names for autocomplete."""
        base_dir = set(super().__dir__())
        units = set(self._reg.all().keys())
        symbols = set(self._reg.symbols().keys())
        return sorted(base_dir | units | symbols)

UnitNamespace._reserved_names = set(dir(UnitNamespace))


# ---------------------------------------------------------------------------
# Bootstrap a default registry from the catalog
# ---------------------------------------------------------------------------

def _bootstrap_default_registry() -> UnitsRegistry:
    reg = UnitsRegistry()
    for entry in CATALOG:
        reg.register(
            entry.name,
            entry.factor,
            symbol=entry.symbol,
            aliases=entry.aliases,
            prefixable=entry.prefixable,
        )
        for extra in entry.symbol_aliases:
            reg.register_symbol(extra, entry.name)
    logger.debug("bootstrapped units registry with %d units", len(CATALOG))
    return reg


# Public, shared default registry
DEFAULT_REGISTRY: UnitsRegistry = _bootstrap_default_registry()


__all__ = [
    "UnitsRegistry",
    "UnitNamespace",
    "DEFAULT_REGISTRY",
    "normalize_symbol",
]
