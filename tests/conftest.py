import sys
from datetime import date
from pathlib import Path

import pytest

# 确保项目根目录在 sys.path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def monthly_loan():
    """12 万, 12 期, 年利率 12%, 按月计息 -> 月利率 1%"""
    from data_manager.schema import LoanParameters
    return LoanParameters(
        principal=120000,
        annual_rate=12,
        instalment_count=12,
        instalment_frequency="monthly",
        compounding="monthly",
        sanction_date=date(2023, 12, 20),
        instalment_start_date=date(2024, 1, 15),
    )
