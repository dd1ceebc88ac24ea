from datetime import date, datetime, time, timedelta
from typing import List, Tuple

from app.models.enums import DayOfWeek
from app.schemas.schedule import WorkoutCycleRead, WorkoutWeekRead, empty_week_schedule


def week_start(day: date) -> date:
    """Понедельник недели, в которую попадает day"""
    return day - timedelta(days=day.weekday())


def single_day_schedule(day: DayOfWeek, playlist_id: int) -> dict:
    schedule = empty_week_schedule()
    schedule[day] = playlist_id
    return schedule


def plan_week(week: WorkoutWeekRead, start: date) -> List[Tuple[datetime, int]]:
    """
    Развернуть недельный шаблон в конкретные даты.

    start приводится к понедельнику; дни без плейлиста пропускаются.
    Возвращает пары (дата, playlist_id) в порядке дней недели.
    """
    monday = week_start(start)
    planned = []
    for day in DayOfWeek:
        playlist_id = week.schedule.get(day)
        if not playlist_id:
            continue
        planned.append((datetime.combine(monday + timedelta(days=day.offset), time.min), playlist_id))
    return planned


def advance_cycle(cycle: WorkoutCycleRead) -> WorkoutCycleRead:
    """
    Перейти к следующей неделе цикла.

    С auto_rotate после последней недели возвращаемся к первой,
    без него остаёмся на последней.
    """
    if not cycle.weeks:
        return cycle.model_copy(update={"current_week_index": 0})

    next_index = cycle.current_week_index + 1
    if next_index >= len(cycle.weeks):
        next_index = 0 if cycle.auto_rotate else len(cycle.weeks) - 1
    return cycle.model_copy(update={"current_week_index": next_index})


def clamp_week_index(index: int, weeks_count: int) -> int:
    if weeks_count == 0:
        return 0
    return max(0, min(index, weeks_count - 1))
