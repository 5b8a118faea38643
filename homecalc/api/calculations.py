"""
Financial calculation API endpoints.

These endpoints accept inputs and return calculated results. All domain
logic lives in homecalc.calculations; this module only converts between
request/response schemas and engine records. Money is returned as Decimal
so it serializes without float artifacts.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from homecalc.calculations import (
    affordability,
    amortization,
    closing_costs,
    investment,
    mortgage_insurance,
    rent_vs_buy,
    validation,
)
from homecalc.calculations.amortization import PaymentFrequency
from homecalc.calculations.errors import CalculationError, OutOfRangeWarning
from homecalc.calculations.land_transfer_tax import City, Province
from homecalc.calculations.money import to_decimal
from homecalc.calculations.validation import MAX_AMORTIZATION_YEARS

logger = logging.getLogger(__name__)

router = APIRouter()


def _bad_request(endpoint: str, exc: CalculationError) -> HTTPException:
    logger.warning("Rejected %s calculation: %s", endpoint, exc)
    return HTTPException(status_code=400, detail=str(exc))


# =============================================================================
# SHARED SCHEMAS
# =============================================================================


class IssueOut(BaseModel):
    """Error or advisory attached to a result."""

    field: str
    message: str


def _warnings(items: List[OutOfRangeWarning]) -> List[IssueOut]:
    return [IssueOut(field=w.field, message=w.message) for w in items]


class ClosingCostPresetInput(BaseModel):
    """Line item overrides; omitted items keep their computed value."""

    name: str
    tag: str = ""
    land_transfer_tax: Optional[float] = None
    municipal_tax: Optional[float] = None
    legal_fees: Optional[float] = None
    title_insurance: Optional[float] = None
    home_inspection: Optional[float] = None
    appraisal: Optional[float] = None
    survey_fee: Optional[float] = None
    first_time_buyer_rebate: Optional[float] = None


class ClosingCostsResponse(BaseModel):
    """Closing cost breakdown."""

    land_transfer_tax: Decimal
    municipal_tax: Decimal
    legal_fees: Decimal
    title_insurance: Decimal
    home_inspection: Decimal
    appraisal: Decimal
    survey_fee: Decimal
    first_time_buyer_rebate: Decimal
    total: Decimal
    cash_required_at_closing: Decimal


def _closing_costs_response(
    breakdown: closing_costs.ClosingCostBreakdown, down_payment: float
) -> ClosingCostsResponse:
    return ClosingCostsResponse(
        land_transfer_tax=to_decimal(breakdown.land_transfer_tax),
        municipal_tax=to_decimal(breakdown.municipal_tax),
        legal_fees=to_decimal(breakdown.legal_fees),
        title_insurance=to_decimal(breakdown.title_insurance),
        home_inspection=to_decimal(breakdown.home_inspection),
        appraisal=to_decimal(breakdown.appraisal),
        survey_fee=to_decimal(breakdown.survey_fee),
        first_time_buyer_rebate=to_decimal(breakdown.first_time_buyer_rebate),
        total=to_decimal(breakdown.total),
        cash_required_at_closing=to_decimal(
            closing_costs.calculate_cash_required_at_closing(down_payment, breakdown)
        ),
    )


class YearRowOut(BaseModel):
    """One year of an amortization schedule."""

    year: int
    principal_paid: Decimal
    interest_paid: Decimal
    ending_balance: Decimal
    total_paid: Decimal
    cumulative_interest: Decimal


def _year_rows(rows: List[amortization.AmortizationYearRow]) -> List[YearRowOut]:
    return [
        YearRowOut(
            year=row.year,
            principal_paid=to_decimal(row.principal_paid),
            interest_paid=to_decimal(row.interest_paid),
            ending_balance=to_decimal(row.ending_balance),
            total_paid=to_decimal(row.total_paid),
            cumulative_interest=to_decimal(row.cumulative_interest),
        )
        for row in rows
    ]


# =============================================================================
# MORTGAGE
# =============================================================================


class MortgageInput(BaseModel):
    """Input for a full mortgage calculation."""

    home_price: float
    down_payment: float
    interest_rate: float = Field(description="Annual rate as a percentage, e.g. 5.25")
    amortization_years: int = 25
    payment_frequency: PaymentFrequency = PaymentFrequency.monthly
    province: Province = Province.ontario
    city: Optional[City] = None
    is_first_time_buyer: bool = False
    closing_cost_preset: Optional[ClosingCostPresetInput] = None


class InsuranceOut(BaseModel):
    """CMHC default insurance."""

    is_required: bool
    rate: Decimal
    premium: Decimal
    total_loan_amount: Decimal


class MortgageResponse(BaseModel):
    """Mortgage summary with schedule, insurance and closing costs."""

    loan_amount: Decimal
    monthly_payment: Decimal
    periodic_payment: Decimal
    payments_per_year: int
    total_cost: Decimal
    total_interest: Decimal
    down_payment_percent: Decimal
    insurance: InsuranceOut
    closing_costs: ClosingCostsResponse
    schedule: List[YearRowOut]
    warnings: List[IssueOut]


@router.post("/mortgage", response_model=MortgageResponse)
async def calculate_mortgage(inputs: MortgageInput):
    """Calculate payment, total cost, amortization and closing costs."""
    try:
        checked = validation.validate_mortgage_inputs(
            home_price=inputs.home_price,
            down_payment=inputs.down_payment,
            annual_rate_percent=inputs.interest_rate,
            amortization_years=inputs.amortization_years,
            province=inputs.province,
            is_first_time_buyer=inputs.is_first_time_buyer,
        )
        checked.raise_for_errors()

        terms = amortization.LoanTerms(
            home_price=inputs.home_price,
            down_payment=inputs.down_payment,
            annual_rate_percent=inputs.interest_rate,
            amortization_years=inputs.amortization_years,
            payment_frequency=inputs.payment_frequency,
        )
        summary = amortization.summarize_mortgage(terms)
        schedule = amortization.generate_amortization_schedule(
            terms.loan_amount, terms.annual_rate_percent, terms.amortization_years
        )
        insurance = mortgage_insurance.calculate_cmhc_insurance(
            terms.home_price, terms.down_payment
        )
        loan_total = mortgage_insurance.calculate_total_loan_amount(
            terms.home_price, terms.down_payment
        )

        preset = None
        if inputs.closing_cost_preset is not None:
            preset = closing_costs.ClosingCostPreset(**inputs.closing_cost_preset.model_dump())
        breakdown = closing_costs.estimate_closing_costs(
            price=terms.home_price,
            province=inputs.province,
            city=inputs.city,
            is_first_time_buyer=inputs.is_first_time_buyer,
            preset=preset,
        )
    except CalculationError as e:
        raise _bad_request("mortgage", e)

    return MortgageResponse(
        loan_amount=to_decimal(summary.loan_amount),
        monthly_payment=to_decimal(summary.monthly_payment),
        periodic_payment=to_decimal(summary.periodic_payment),
        payments_per_year=summary.payments_per_year,
        total_cost=to_decimal(summary.total_cost),
        total_interest=to_decimal(summary.total_interest),
        down_payment_percent=to_decimal(summary.down_payment_percent),
        insurance=InsuranceOut(
            is_required=insurance.is_required,
            rate=to_decimal(insurance.rate, 4),
            premium=to_decimal(insurance.premium),
            total_loan_amount=to_decimal(loan_total.total_loan_amount),
        ),
        closing_costs=_closing_costs_response(breakdown, terms.down_payment),
        schedule=_year_rows(schedule),
        warnings=_warnings(checked.warnings),
    )


# =============================================================================
# AMORTIZATION
# =============================================================================


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    loan_amount: float
    interest_rate: float
    amortization_years: int = Field(gt=0, le=MAX_AMORTIZATION_YEARS)
    monthly: bool = False
    start_date: Optional[date] = None


class MonthRowOut(BaseModel):
    """One monthly payment."""

    period: int
    payment_date: Optional[date]
    payment: Decimal
    interest: Decimal
    principal: Decimal
    ending_balance: Decimal


class AmortizationResponse(BaseModel):
    """Amortization schedule and totals."""

    monthly_payment: Decimal
    schedule: List[YearRowOut]
    total_interest: Decimal
    total_principal: Decimal
    monthly_schedule: Optional[List[MonthRowOut]] = None


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Generate a yearly (or monthly) loan amortization schedule."""
    try:
        monthly_payment = amortization.calculate_monthly_payment(
            inputs.loan_amount, inputs.interest_rate, inputs.amortization_years
        )
        yearly = amortization.generate_amortization_schedule(
            inputs.loan_amount, inputs.interest_rate, inputs.amortization_years
        )
        monthly = None
        if inputs.monthly:
            monthly = amortization.generate_monthly_schedule(
                inputs.loan_amount,
                inputs.interest_rate,
                inputs.amortization_years,
                start_date=inputs.start_date,
            )
    except CalculationError as e:
        raise _bad_request("amortization", e)

    monthly_rows = None
    if monthly is not None:
        monthly_rows = [
            MonthRowOut(
                period=row.period,
                payment_date=row.payment_date,
                payment=to_decimal(row.payment),
                interest=to_decimal(row.interest),
                principal=to_decimal(row.principal),
                ending_balance=to_decimal(row.ending_balance),
            )
            for row in monthly
        ]

    return AmortizationResponse(
        monthly_payment=to_decimal(monthly_payment),
        schedule=_year_rows(yearly),
        total_interest=to_decimal(amortization.calculate_total_interest(yearly)),
        total_principal=to_decimal(sum(row.principal_paid for row in yearly)),
        monthly_schedule=monthly_rows,
    )


# =============================================================================
# CLOSING COSTS
# =============================================================================


class ClosingCostsInput(BaseModel):
    """Input for closing cost estimation."""

    home_price: float
    down_payment: float = 0.0
    province: Province
    city: Optional[City] = None
    is_first_time_buyer: bool = False
    preset: Optional[ClosingCostPresetInput] = None


@router.post("/closing-costs", response_model=ClosingCostsResponse)
async def calculate_closing_costs(inputs: ClosingCostsInput):
    """Estimate land transfer taxes, fees and cash needed at closing."""
    try:
        preset = None
        if inputs.preset is not None:
            preset = closing_costs.ClosingCostPreset(**inputs.preset.model_dump())
        breakdown = closing_costs.estimate_closing_costs(
            price=inputs.home_price,
            province=inputs.province,
            city=inputs.city,
            is_first_time_buyer=inputs.is_first_time_buyer,
            preset=preset,
        )
    except CalculationError as e:
        raise _bad_request("closing-costs", e)

    return _closing_costs_response(breakdown, inputs.down_payment)


# =============================================================================
# INVESTMENT
# =============================================================================


class InvestmentInput(BaseModel):
    """Input for rental investment analysis."""

    home_price: float
    down_payment: float
    monthly_rent: float
    interest_rate: float
    monthly_expenses: Dict[str, float] = Field(
        default_factory=lambda: {name: 0.0 for name in investment.EXPENSE_CATEGORIES}
    )


class InvestmentResponse(BaseModel):
    """Rental metrics with any risk advisories."""

    monthly_mortgage: Decimal
    monthly_cash_flow: Decimal
    cap_rate_percent: Decimal
    cash_on_cash_roi_percent: Decimal
    break_even_rent: Decimal
    total_monthly_expenses: Decimal
    annual_net_operating_income: Decimal
    warnings: List[IssueOut]


@router.post("/investment", response_model=InvestmentResponse)
async def calculate_investment(inputs: InvestmentInput):
    """Calculate cash flow, cap rate and cash-on-cash return."""
    try:
        metrics = investment.calculate_investment_metrics(
            home_price=inputs.home_price,
            down_payment=inputs.down_payment,
            monthly_rent=inputs.monthly_rent,
            monthly_expenses=inputs.monthly_expenses,
            annual_rate_percent=inputs.interest_rate,
        )
    except CalculationError as e:
        raise _bad_request("investment", e)

    return InvestmentResponse(
        monthly_mortgage=to_decimal(metrics.monthly_mortgage),
        monthly_cash_flow=to_decimal(metrics.monthly_cash_flow),
        cap_rate_percent=to_decimal(metrics.cap_rate_percent),
        cash_on_cash_roi_percent=to_decimal(metrics.cash_on_cash_roi_percent),
        break_even_rent=to_decimal(metrics.break_even_rent),
        total_monthly_expenses=to_decimal(metrics.total_monthly_expenses),
        annual_net_operating_income=to_decimal(metrics.annual_net_operating_income),
        warnings=_warnings(investment.flag_investment_risks(metrics)),
    )


# =============================================================================
# AFFORDABILITY
# =============================================================================


class AffordabilityInput(BaseModel):
    """Input for affordability estimation."""

    annual_income: float
    monthly_debts: float = 0.0
    down_payment: float
    interest_rate: float
    stress_test: bool = False


class AffordabilityResponse(BaseModel):
    """Maximum price and qualifying ratios."""

    max_affordable_price: Decimal
    max_loan_amount: Decimal
    max_monthly_payment: Decimal
    gds_ratio_percent: Decimal
    tds_ratio_percent: Decimal
    is_within_guidelines: bool
    qualifying_rate_percent: Decimal


@router.post("/affordability", response_model=AffordabilityResponse)
async def calculate_affordability(inputs: AffordabilityInput):
    """Estimate the maximum affordable purchase price."""
    try:
        result = affordability.estimate_affordability(
            annual_income=inputs.annual_income,
            monthly_debts=inputs.monthly_debts,
            down_payment=inputs.down_payment,
            annual_rate_percent=inputs.interest_rate,
            stress_test=inputs.stress_test,
        )
    except CalculationError as e:
        raise _bad_request("affordability", e)

    return AffordabilityResponse(
        max_affordable_price=to_decimal(result.max_affordable_price),
        max_loan_amount=to_decimal(result.max_loan_amount),
        max_monthly_payment=to_decimal(result.max_monthly_payment),
        gds_ratio_percent=to_decimal(result.gds_ratio_percent),
        tds_ratio_percent=to_decimal(result.tds_ratio_percent),
        is_within_guidelines=result.is_within_guidelines,
        qualifying_rate_percent=to_decimal(result.qualifying_rate_percent),
    )


# =============================================================================
# RENT VS BUY
# =============================================================================


class RentVsBuyInput(BaseModel):
    """Input for rent vs buy comparison."""

    monthly_rent: float
    annual_rent_increase: float = 3.0
    comparison_years: int = 10
    down_payment: float
    monthly_payment: float


class RentVsBuyYearOut(BaseModel):
    year: int
    cumulative_rent_paid: Decimal
    cumulative_ownership_cost: Decimal
    net_difference: Decimal


class RentVsBuyResponse(BaseModel):
    """Year-by-year comparison and totals."""

    years: List[RentVsBuyYearOut]
    total_rent_paid: Decimal
    total_ownership_cost: Decimal
    net_benefit_of_buying: Decimal
    buying_is_cheaper: bool


@router.post("/rent-vs-buy", response_model=RentVsBuyResponse)
async def calculate_rent_vs_buy(inputs: RentVsBuyInput):
    """Compare cumulative rent with cumulative ownership cost."""
    try:
        projection = rent_vs_buy.compare_rent_vs_buy(
            monthly_rent=inputs.monthly_rent,
            annual_rent_increase_percent=inputs.annual_rent_increase,
            comparison_years=inputs.comparison_years,
            down_payment=inputs.down_payment,
            monthly_payment=inputs.monthly_payment,
        )
    except CalculationError as e:
        raise _bad_request("rent-vs-buy", e)

    return RentVsBuyResponse(
        years=[
            RentVsBuyYearOut(
                year=row.year,
                cumulative_rent_paid=to_decimal(row.cumulative_rent_paid),
                cumulative_ownership_cost=to_decimal(row.cumulative_ownership_cost),
                net_difference=to_decimal(row.net_difference),
            )
            for row in projection.years
        ],
        total_rent_paid=to_decimal(projection.total_rent_paid),
        total_ownership_cost=to_decimal(projection.total_ownership_cost),
        net_benefit_of_buying=to_decimal(projection.net_benefit_of_buying),
        buying_is_cheaper=projection.buying_is_cheaper,
    )


# =============================================================================
# VALIDATION
# =============================================================================


class ValidationInput(BaseModel):
    """Mortgage form values to check."""

    home_price: float
    down_payment: float
    interest_rate: float
    amortization_years: int
    province: Province = Province.ontario
    is_first_time_buyer: bool = False


class ValidationResponse(BaseModel):
    is_valid: bool
    errors: List[IssueOut]
    warnings: List[IssueOut]
    minimum_down_payment: Optional[Decimal] = None


@router.post("/validate", response_model=ValidationResponse)
async def validate_inputs(inputs: ValidationInput):
    """Check mortgage inputs and return errors and advisories."""
    result = validation.validate_mortgage_inputs(
        home_price=inputs.home_price,
        down_payment=inputs.down_payment,
        annual_rate_percent=inputs.interest_rate,
        amortization_years=inputs.amortization_years,
        province=inputs.province,
        is_first_time_buyer=inputs.is_first_time_buyer,
    )

    minimum = None
    if inputs.home_price > 0:
        minimum = to_decimal(validation.minimum_down_payment(inputs.home_price))

    return ValidationResponse(
        is_valid=result.is_valid,
        errors=[IssueOut(field=e.field, message=e.message) for e in result.errors],
        warnings=_warnings(result.warnings),
        minimum_down_payment=minimum,
    )
