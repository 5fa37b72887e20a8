import pytest

from models import Intent
from services.company_data import parse_company_data
from services.intent import classify_intent, select_relevant_data
from services.metrics import calculate_metrics


@pytest.mark.parametrize("prompt, expected", [
    ("Show me ATTENDANCE for May", Intent.ATTENDANCE),
    ("who is on leave this week", Intent.LEAVE),
    ("How many staff do we have?", Intent.EMPLOYEE),
    ("list employees in sales", Intent.EMPLOYEE),
    ("quarterly revenue", Intent.SALES),
    ("performance reviews", Intent.PERFORMANCE),
    ("project status", Intent.PROJECT),
    ("any risk ahead?", Intent.RISK),
    ("growth plan", Intent.GROWTH),
    ("what's the weather", Intent.GENERAL),
    ("", Intent.GENERAL),
    (None, Intent.GENERAL),
])
def test_classify_intent(prompt, expected):
    assert classify_intent(prompt) == expected


def test_first_keyword_in_list_order_wins():
    # "leave" is listed before "employee" and "sales"
    assert classify_intent("employee sales leave") == Intent.LEAVE
    assert classify_intent("attendance of employees on leave") == Intent.ATTENDANCE


def test_employee_selection_contains_only_users(company_tree, company_documents):
    data = parse_company_data({**company_tree, **company_documents})
    selected = select_relevant_data(Intent.EMPLOYEE, data)
    assert list(selected) == ["users"]
    assert set(selected["users"]) == {"u1", "u2", "u3", "h1"}


def test_selection_per_intent(company_tree, company_documents):
    data = parse_company_data({**company_tree, **company_documents})
    assert set(select_relevant_data(Intent.ATTENDANCE, data)) == {"attendance", "users"}
    assert set(select_relevant_data(Intent.SALES, data)) == {"sales"}
    assert set(select_relevant_data(Intent.PROJECT, data)) == {"projects"}
    everything = {"users", "attendance", "leaves", "alerts", "aiConfig", "performance", "sales", "projects"}
    for intent in (Intent.RISK, Intent.GROWTH, Intent.GENERAL):
        assert set(select_relevant_data(intent, data)) == everything


def test_metrics(company_tree, company_documents):
    data = parse_company_data({**company_tree, **company_documents})
    metrics = calculate_metrics(data)

    # u1, u2 (Engineering) and legacy u3 (role EMPLOYEE, no accountType); HR excluded
    assert metrics.total_employees == 3
    assert metrics.department_wise == {"Engineering": 2, "Sales": 1}
    assert sum(metrics.department_wise.values()) == metrics.total_employees
    assert metrics.attendance_count == 2
    assert metrics.leave_requests == 1
    assert metrics.total_sales == pytest.approx(1500.5)
    assert metrics.project_count == 2


def test_metrics_on_empty_aggregate():
    metrics = calculate_metrics(parse_company_data({}))
    assert metrics.to_payload() == {
        "totalEmployees": 0,
        "departmentWise": {},
        "attendanceCount": 0,
        "leaveRequests": 0,
        "totalSales": 0,
        "projectCount": 0,
    }
