# farmledger/services/dashboard.py
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta

from ..models import Agreement, Land, Parchi, Payment

RENEWAL_WINDOW_DAYS = 90
RECENT_LIMIT = 5


def total_amounts(payments):
    """Sum expected and received amounts; missing amounts count as zero."""
    expected = sum((Decimal(p.expected_amount or 0) for p in payments), Decimal(0))
    received = sum((Decimal(p.received_amount or 0) for p in payments), Decimal(0))
    return expected, received


def renewal_window(today):
    return today, today + relativedelta(days=RENEWAL_WINDOW_DAYS)


def build_dashboard(store, today=None):
    """Summary figures and the two short lists shown on the overview page.

    The five queries are independent of each other; each one that finds no
    rows contributes a zero or an empty list. ``today`` fixes the renewal
    window for the whole call.
    """
    today = today or date.today()
    window_start, window_end = renewal_window(today)

    land_count = store.count(Land)
    active_agreements = store.count(Agreement, filters=[Agreement.status == "active"])
    expected, received = total_amounts(store.list(Payment))

    recent_parchis = store.list(Parchi, limit=RECENT_LIMIT)

    # Strictly inside (today, today + 90 days)
    upcoming = store.list(
        Agreement,
        filters=[
            Agreement.status == "active",
            Agreement.end_date > window_start,
            Agreement.end_date < window_end,
        ],
        order_by=[Agreement.end_date.asc(), Agreement.id.asc()],
        limit=RECENT_LIMIT,
    )

    return {
        "stats": {
            "total_lands": land_count,
            "active_agreements": active_agreements,
            "total_expected_income": float(expected),
            "total_received_income": float(received),
            "pending_income": float(expected - received),
        },
        "recent_parchis": [
            {
                "id": p.id,
                "land_id_code": p.land_id_code,
                "parchi_type": p.parchi_type,
                "amount": float(p.amount) if p.amount is not None else None,
                "parchi_date": p.parchi_date.isoformat(),
            }
            for p in recent_parchis
        ],
        "upcoming_renewals": [
            {
                "id": a.id,
                "land_id_code": a.land_id_code,
                "farmer_name": a.farmer_name,
                "end_date": a.end_date.isoformat(),
                "days_until_expiration": a.days_until_expiration(today),
            }
            for a in upcoming
        ],
        "window": {"from": window_start.isoformat(), "to": window_end.isoformat()},
    }
