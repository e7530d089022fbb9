"""
SoQL clause helpers for Socrata queries.

Builds the `$where` predicates shared across datasets: string quoting,
proximity circles and borough/block/lot filters.
"""

from building_health.models.bbl import BBL


def quote(value) -> str:
    """Quote a value as a SoQL string literal, escaping single quotes."""
    return "'" + str(value).replace("'", "''") + "'"


def within_circle(field: str, lat: float, lng: float, radius_m: int) -> str:
    """Spatial predicate selecting rows within radius_m meters of a point."""
    return f"within_circle({field},{lat},{lng},{radius_m})"


def and_(*clauses: str) -> str:
    """Join non-empty clauses with AND."""
    return " AND ".join(c for c in clauses if c)


def block_lot_where(bbl: BBL, borough_field: str = "boro") -> str:
    """Filter on unpadded string block/lot columns (DOB datasets)."""
    return and_(
        f"{borough_field}={quote(bbl.borough)}",
        f"block={quote(bbl.block)}",
        f"lot={quote(bbl.lot)}",
    )


def numeric_block_lot_where(bbl: BBL, borough_field: str = "borough", quote_borough: bool = True) -> str:
    """Filter on numeric block/lot columns (ACRIS, DOF sales)."""
    borough = quote(bbl.borough) if quote_borough else bbl.borough
    return and_(
        f"{borough_field}={borough}",
        f"block={bbl.block_int}",
        f"lot={bbl.lot_int}",
    )
