"""JSON shapes for API responses."""

from dataclasses import asdict

from fitness_tracker.domain.advice import AdviceResult
from fitness_tracker.domain.metrics import (
    BMICategory,
    CaloricPlan,
    HealthInsights,
    IdealWeightRange,
)
from fitness_tracker.domain.profile import UserRecord
from fitness_tracker.domain.progress import (
    InsufficientData,
    ProgressSummary,
    TrendReport,
)
from fitness_tracker.services.progress import ProgressCharts, ProgressEntryView


def serialize_bmi(value: float, category: BMICategory) -> dict[str, object]:
    return {
        "value": value,
        "category": category.category,
        "status": category.status,
        "description": category.description,
        "recommendations": list(category.recommendations),
    }


def serialize_ideal_weight(ideal: IdealWeightRange) -> dict[str, object]:
    return {"min": ideal.min, "max": ideal.max, "range": ideal.range}


def serialize_caloric_plan(plan: CaloricPlan) -> dict[str, object]:
    return asdict(plan)


def serialize_health_insights(report: HealthInsights) -> dict[str, object]:
    return {
        "bmi": serialize_bmi(report.bmi.value, report.bmi.category),
        "ideal_weight": serialize_ideal_weight(report.ideal_weight),
        "caloric_needs": serialize_caloric_plan(report.caloric_needs),
        "insights": report.insights,
    }


def serialize_user(user: UserRecord) -> dict[str, object]:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "age": user.age,
        "gender": user.gender.value,
        "height_cm": user.height_cm,
        "weight_kg": user.weight_kg,
        "goal": user.goal.value,
        "experience": user.experience,
        "created_at": user.created_at.isoformat() if user.created_at else None,
    }


def serialize_entry(view: ProgressEntryView) -> dict[str, object]:
    snapshot = view.snapshot
    return {
        "id": str(snapshot.id) if snapshot.id else None,
        "date": snapshot.date.isoformat(),
        "weight_kg": snapshot.weight_kg,
        "bmi": snapshot.bmi,
        "bmi_category": view.bmi_category.category if view.bmi_category else None,
        "body_fat_percentage": snapshot.body_fat_percentage,
        "muscle_mass_kg": snapshot.muscle_mass_kg,
        "measurements": asdict(snapshot.measurements)
        if snapshot.measurements
        else None,
        "notes": snapshot.notes,
        "mood": snapshot.mood.value,
        "energy_level": snapshot.energy_level,
        "weight_change": asdict(view.weight_change) if view.weight_change else None,
    }


def serialize_trends(trends: TrendReport | None) -> dict[str, object] | None:
    if trends is None:
        return None
    return asdict(trends)


def serialize_summary(
    summary: ProgressSummary | InsufficientData,
) -> dict[str, object]:
    if isinstance(summary, InsufficientData):
        return {"message": summary.message, "total_entries": summary.entries}
    return {
        "total_entries": summary.total_entries,
        "weight_change": {
            "amount": summary.weight_change,
            "percentage": summary.weight_change_percentage,
        },
        "bmi_change": summary.bmi_change,
        "average_energy_level": summary.average_energy_level,
        "period": summary.period,
        "trends": serialize_trends(summary.trends),
        "insights": summary.insights,
        "milestones": [asdict(milestone) for milestone in summary.milestones],
    }


def serialize_charts(charts: ProgressCharts) -> dict[str, object]:
    if charts.data_points == 0:
        return {"message": "No data available for charts", "data_points": 0}
    payload = asdict(charts)
    payload["trends"] = serialize_trends(charts.trends)
    return payload


def serialize_advice(result: AdviceResult, key: str = "tips") -> dict[str, object]:
    return {
        "success": result.success,
        "message": result.message,
        key: result.tips,
        "generated_at": result.generated_at.isoformat()
        if result.generated_at
        else None,
    }
