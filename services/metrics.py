# services/metrics.py
from models import AccountType, CompanyData, MetricsSnapshot


def calculate_metrics(data: CompanyData) -> MetricsSnapshot:
    """Headcount, per-department counts, attendance/leave counts, sales total and project count."""
    employees = [u for u in data.users.values() if u.account_type == AccountType.EMPLOYEE]

    department_wise: dict[str, int] = {}
    for e in employees:
        department_wise[e.department] = department_wise.get(e.department, 0) + 1

    return MetricsSnapshot(
        total_employees=len(employees),
        department_wise=department_wise,
        attendance_count=len(data.attendance),
        leave_requests=len(data.leaves),
        total_sales=sum(s.amount for s in data.sales),
        project_count=len(data.projects),
    )
