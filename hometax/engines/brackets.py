"""Tax table configuration.

Federal (married filing jointly) brackets and thresholds plus the built-in
state catalog. Brackets use inclusive tax-table bounds: each bracket's
``min_income`` is one dollar above the previous bracket's ``max_income``.
Never hardcode brackets in computation functions; build a
``TaxTableConfig`` with :func:`default_tax_tables` and pass it in.
"""

from decimal import Decimal

from hometax.models.inputs import HousingInputs
from hometax.models.jurisdiction import Bracket, JurisdictionProfile, TaxTableConfig

TAX_YEAR = 2026

# ---------------------------------------------------------------------------
# Federal ordinary income brackets (MFJ): (min, max, rate), max None = unbounded
# ---------------------------------------------------------------------------
FEDERAL_BRACKETS_MFJ: list[tuple[Decimal, Decimal | None, Decimal]] = [
    (Decimal("0"), Decimal("23850"), Decimal("0.10")),
    (Decimal("23851"), Decimal("96950"), Decimal("0.12")),
    (Decimal("96951"), Decimal("206700"), Decimal("0.22")),
    (Decimal("206701"), Decimal("394600"), Decimal("0.24")),
    (Decimal("394601"), Decimal("501050"), Decimal("0.32")),
    (Decimal("501051"), Decimal("751600"), Decimal("0.35")),
    (Decimal("751601"), None, Decimal("0.37")),
]

FEDERAL_STANDARD_DEDUCTION_MFJ = Decimal("31500")

# ---------------------------------------------------------------------------
# Federal LTCG tiers: taxable-income ceilings of the 0% and 15% rates
# ---------------------------------------------------------------------------
LTCG_ZERO_CEILING_MFJ = Decimal("96950")
LTCG_FIFTEEN_CEILING_MFJ = Decimal("583750")

# ---------------------------------------------------------------------------
# Itemized deduction limits
# ---------------------------------------------------------------------------
SALT_CAP = Decimal("40000")
FEDERAL_MORTGAGE_DEBT_LIMIT = Decimal("750000")
CA_MORTGAGE_DEBT_LIMIT = Decimal("1000000")

# ---------------------------------------------------------------------------
# NIIT (IRC Section 1411): statutory, not inflation-adjusted
# ---------------------------------------------------------------------------
NIIT_RATE = Decimal("0.038")
NIIT_THRESHOLD_MFJ = Decimal("250000")

# ---------------------------------------------------------------------------
# Payroll (FICA). Additional Medicare applies to AGI above the threshold.
# ---------------------------------------------------------------------------
SOCIAL_SECURITY_RATE = Decimal("0.062")
SOCIAL_SECURITY_WAGE_BASE = Decimal("182400")
MEDICARE_RATE = Decimal("0.0145")
ADDITIONAL_MEDICARE_RATE = Decimal("0.009")
ADDITIONAL_MEDICARE_THRESHOLD_MFJ = Decimal("250000")

# ---------------------------------------------------------------------------
# California (FTB, MFJ). SDI is withheld on all wages.
# ---------------------------------------------------------------------------
CALIFORNIA_BRACKETS_MFJ: list[tuple[Decimal, Decimal | None, Decimal]] = [
    (Decimal("0"), Decimal("22108"), Decimal("0.01")),
    (Decimal("22109"), Decimal("52420"), Decimal("0.02")),
    (Decimal("52421"), Decimal("82734"), Decimal("0.04")),
    (Decimal("82735"), Decimal("114902"), Decimal("0.06")),
    (Decimal("114903"), Decimal("145194"), Decimal("0.08")),
    (Decimal("145195"), Decimal("742568"), Decimal("0.093")),
    (Decimal("742569"), Decimal("891080"), Decimal("0.103")),
    (Decimal("891081"), Decimal("1485132"), Decimal("0.113")),
    (Decimal("1485133"), None, Decimal("0.123")),
]
CALIFORNIA_STANDARD_DEDUCTION_MFJ = Decimal("10404")
CA_SDI_RATE = Decimal("0.013")

COLORADO_BRACKETS: list[tuple[Decimal, Decimal | None, Decimal]] = [
    (Decimal("0"), None, Decimal("0.044")),
]

OHIO_BRACKETS: list[tuple[Decimal, Decimal | None, Decimal]] = [
    (Decimal("0"), Decimal("26050"), Decimal("0.00")),
    (Decimal("26051"), Decimal("100000"), Decimal("0.0275")),
    (Decimal("100001"), None, Decimal("0.035")),
]
OHIO_DEFAULT_LOCAL_RATE = Decimal("2.5")  # percent of AGI

NORTH_CAROLINA_BRACKETS: list[tuple[Decimal, Decimal | None, Decimal]] = [
    (Decimal("0"), None, Decimal("0.0425")),
]
NORTH_CAROLINA_STANDARD_DEDUCTION_MFJ = Decimal("25500")

# ---------------------------------------------------------------------------
# Housing assumptions used when a jurisdiction is selected without any
# ---------------------------------------------------------------------------
DEFAULT_HOUSING: dict[str, HousingInputs] = {
    "California": HousingInputs(
        mortgage_amount=Decimal("1000000"),
        mortgage_rate=Decimal("5.5"),
        property_tax=Decimal("12000"),
        home_insurance=Decimal("1500"),
        monthly_rent=Decimal("4000"),
    ),
    "Texas": HousingInputs(
        mortgage_amount=Decimal("450000"),
        mortgage_rate=Decimal("5.8"),
        property_tax=Decimal("9500"),
        home_insurance=Decimal("2000"),
        monthly_rent=Decimal("2500"),
    ),
    "Colorado": HousingInputs(
        mortgage_amount=Decimal("600000"),
        mortgage_rate=Decimal("5.6"),
        property_tax=Decimal("6000"),
        home_insurance=Decimal("1200"),
        monthly_rent=Decimal("2200"),
    ),
    "Ohio": HousingInputs(
        mortgage_amount=Decimal("300000"),
        mortgage_rate=Decimal("5.9"),
        property_tax=Decimal("5500"),
        home_insurance=Decimal("1000"),
        monthly_rent=Decimal("1800"),
        local_tax_rate=Decimal("2.5"),
    ),
    "North Carolina": HousingInputs(
        mortgage_amount=Decimal("400000"),
        mortgage_rate=Decimal("5.7"),
        property_tax=Decimal("4000"),
        home_insurance=Decimal("1100"),
        monthly_rent=Decimal("2000"),
    ),
}

GENERIC_HOUSING = HousingInputs(
    mortgage_amount=Decimal("500000"),
    mortgage_rate=Decimal("6.0"),
    property_tax=Decimal("7000"),
    home_insurance=Decimal("1200"),
    monthly_rent=Decimal("2000"),
    local_tax_rate=Decimal("0"),
)


def _brackets(rows: list[tuple[Decimal, Decimal | None, Decimal]]) -> list[Bracket]:
    return [Bracket(min_income=low, max_income=high, rate=rate) for low, high, rate in rows]


def default_jurisdictions() -> dict[str, JurisdictionProfile]:
    """Built-in state catalog, keyed by name."""
    profiles = [
        JurisdictionProfile(
            name="California",
            abbreviation="CA",
            brackets=_brackets(CALIFORNIA_BRACKETS_MFJ),
            standard_deduction=CALIFORNIA_STANDARD_DEDUCTION_MFJ,
            mortgage_debt_limit=CA_MORTGAGE_DEBT_LIMIT,
            payroll_levy_rate=CA_SDI_RATE,
            adds_back_hsa=True,
        ),
        JurisdictionProfile(
            name="Colorado",
            abbreviation="CO",
            brackets=_brackets(COLORADO_BRACKETS),
        ),
        JurisdictionProfile(
            name="Ohio",
            abbreviation="OH",
            brackets=_brackets(OHIO_BRACKETS),
            has_local_tax=True,
            default_local_tax_rate=OHIO_DEFAULT_LOCAL_RATE,
        ),
        JurisdictionProfile(
            name="North Carolina",
            abbreviation="NC",
            brackets=_brackets(NORTH_CAROLINA_BRACKETS),
            standard_deduction=NORTH_CAROLINA_STANDARD_DEDUCTION_MFJ,
        ),
        JurisdictionProfile(name="Texas", abbreviation="TX"),
        JurisdictionProfile(name="Florida", abbreviation="FL"),
    ]
    return {profile.name: profile for profile in profiles}


def default_tax_tables() -> TaxTableConfig:
    """Assemble the built-in federal constants and state catalog."""
    return TaxTableConfig(
        tax_year=TAX_YEAR,
        federal_brackets=_brackets(FEDERAL_BRACKETS_MFJ),
        federal_standard_deduction=FEDERAL_STANDARD_DEDUCTION_MFJ,
        ltcg_zero_ceiling=LTCG_ZERO_CEILING_MFJ,
        ltcg_fifteen_ceiling=LTCG_FIFTEEN_CEILING_MFJ,
        salt_cap=SALT_CAP,
        federal_mortgage_debt_limit=FEDERAL_MORTGAGE_DEBT_LIMIT,
        niit_rate=NIIT_RATE,
        niit_threshold=NIIT_THRESHOLD_MFJ,
        social_security_rate=SOCIAL_SECURITY_RATE,
        social_security_wage_base=SOCIAL_SECURITY_WAGE_BASE,
        medicare_rate=MEDICARE_RATE,
        additional_medicare_rate=ADDITIONAL_MEDICARE_RATE,
        additional_medicare_threshold=ADDITIONAL_MEDICARE_THRESHOLD_MFJ,
        jurisdictions=default_jurisdictions(),
    )


def default_housing_for(jurisdiction: str) -> HousingInputs:
    return DEFAULT_HOUSING.get(jurisdiction, GENERIC_HOUSING)
