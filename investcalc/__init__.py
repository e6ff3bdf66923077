from investcalc.derived import apply_edit, clear_override, reset, resolve_derived_fields
from investcalc.land_tax import compute_land_tax
from investcalc.loan import balance_at_year, monthly_payment
from investcalc.models import (
    InvestmentInputs,
    Jurisdiction,
    OverrideField,
    ProjectionRow,
    PropertyType,
    parse_overrides,
)
from investcalc.projection import PROJECTION_YEARS, project, projection_frame, year_stats
from investcalc.estimates import apply_rent_estimate, commentary_summary, request_commentary
