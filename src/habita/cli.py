"""Command-line front-end for Habita."""

from __future__ import annotations

from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator, Optional

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import HabitaError
from .logging_config import setup_logging
from .models.habit import Habit, HabitType
from .services import forms, profile, schedule, stats, tracking
from .services.dates import decode_frequency, week_range_label
from .services.forms import EMOJI_CHOICES, UI_DAY_NAMES
from .services.habits import HabitStatus, current_streak, day_status

DATE_FORMAT = "%Y-%m-%d"
_TYPE_CHOICE = click.Choice([t.value for t in HabitType], case_sensitive=False)
_STATUS_MARKS = {
    HabitStatus.COMPLETED: "✔",
    HabitStatus.FAILED: "✘",
    HabitStatus.NOT_TRACKED: "·",
}


@contextmanager
def _user_errors() -> Iterator[None]:
    """Report validation/persistence failures as a one-line CLI error."""

    try:
        yield
    except HabitaError as exc:
        raise click.ClickException(exc.message) from exc


def _parse_days(_ctx, _param, value: Optional[str]) -> Optional[list[int]]:
    if value is None:
        return None
    try:
        return [int(token) for token in value.split(",") if token.strip()]
    except ValueError as exc:
        raise click.BadParameter("use comma-separated numbers, 1=Monday..7=Sunday") from exc


def _app(ctx: click.Context) -> AppContext:
    return ctx.obj


def _today(ctx: click.Context) -> date:
    return ctx.meta.get("habita.today") or date.today()


def _load(ctx: click.Context, habit_id: int) -> Habit:
    with _user_errors():
        return tracking.get_habit(repository=_app(ctx).habit_repo, habit_id=habit_id)


def _list_habits(ctx: click.Context) -> list[Habit]:
    with _user_errors():
        return _app(ctx).habit_repo.list_all()


def _days_label(habit: Habit) -> str:
    days = decode_frequency(habit.frequency)
    if len(days) == 7:
        return "every day"
    return ", ".join(UI_DAY_NAMES[day - 1][:3] for day in days)


@click.group()
@click.option(
    "--today",
    type=click.DateTime(formats=[DATE_FORMAT]),
    default=None,
    help="Evaluate streaks and statistics as of this date.",
)
@click.pass_context
def main(ctx: click.Context, today) -> None:
    """Track habits, streaks and statistics."""

    config = BaseConfig()
    setup_logging(config)
    app = create_app_context(config)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if today is not None:
        ctx.meta["habita.today"] = today.date()


@main.command("init")
@click.pass_context
def init_command(ctx: click.Context) -> None:
    """Create the database and report onboarding status."""

    app = _app(ctx)
    click.echo(f"Database ready: {app.config.DATABASE_URL}")
    with _user_errors():
        onboarded = profile.onboarding_complete(repository=app.user_repo)
    if onboarded:
        click.echo("Profile found.")
    else:
        click.echo("No profile yet. Run `habita profile --name ... --surname ... --age ...`.")


@main.command("profile")
@click.option("--name", default=None)
@click.option("--surname", default=None)
@click.option("--age", default=None)
@click.option("--gender", default=None)
@click.pass_context
def profile_command(ctx: click.Context, name, surname, age, gender) -> None:
    """Show the profile, or create/update it when options are given."""

    app = _app(ctx)
    with _user_errors():
        current = profile.get_profile(repository=app.user_repo)
    if all(value is None for value in (name, surname, age, gender)):
        if current is None:
            raise click.ClickException("No profile yet.")
        click.echo(f"{current.name} {current.surname}, {current.age} {current.gender}".rstrip())
        return

    form = forms.ProfileForm.from_user(current) if current else forms.ProfileForm()
    for field_name, value in (("name", name), ("surname", surname), ("age", age), ("gender", gender)):
        if value is not None:
            setattr(form, field_name, value)
    with _user_errors():
        saved = profile.save_profile(repository=app.user_repo, form=form)
    click.echo(f"Profile saved for {saved.name} {saved.surname}.")


def _habit_options(func):
    func = click.option("--days", callback=_parse_days, default=None,
                        help="Scheduled days, 1=Monday..7=Sunday (e.g. 1,3,5).")(func)
    func = click.option("--scale-range", default=None, help="Maximum rating for scalable habits.")(func)
    func = click.option("--target", default=None, help="Daily target for qualitative habits.")(func)
    func = click.option("--type", "habit_type", type=_TYPE_CHOICE, default=None)(func)
    func = click.option("--emoji", type=click.Choice(EMOJI_CHOICES), default=None)(func)
    return func


def _fill_form(form: forms.HabitForm, *, name, emoji, habit_type, target, scale_range, days) -> None:
    if name is not None:
        form.name = name
    if emoji is not None:
        form.emoji = emoji
    if habit_type is not None:
        form.habit_type = HabitType.parse(habit_type)
    if target is not None:
        form.target_value = target
    if scale_range is not None:
        form.scale_range = scale_range
    if days is not None:
        form.selected_days = days


@main.command("add")
@click.argument("name")
@_habit_options
@click.pass_context
def add_command(ctx: click.Context, name, emoji, habit_type, target, scale_range, days) -> None:
    """Add a new habit."""

    form = forms.HabitForm()
    _fill_form(form, name=name, emoji=emoji, habit_type=habit_type, target=target,
               scale_range=scale_range, days=days)
    with _user_errors():
        habit = tracking.save_habit(repository=_app(ctx).habit_repo, form=form)
    click.echo(f"Added habit {habit.id}: {habit.emoji} {habit.name} ({_days_label(habit)})")


@main.command("edit")
@click.argument("habit_id", type=int)
@click.option("--name", default=None)
@_habit_options
@click.pass_context
def edit_command(ctx: click.Context, habit_id, name, emoji, habit_type, target, scale_range, days) -> None:
    """Edit an existing habit."""

    habit = _load(ctx, habit_id)
    form = forms.HabitForm.from_habit(habit)
    _fill_form(form, name=name, emoji=emoji, habit_type=habit_type, target=target,
               scale_range=scale_range, days=days)
    with _user_errors():
        habit = tracking.save_habit(repository=_app(ctx).habit_repo, form=form, habit=habit)
    click.echo(f"Saved habit {habit.id}: {habit.emoji} {habit.name} ({_days_label(habit)})")


@main.command("list")
@click.option("--date", "on_date", type=click.DateTime(formats=[DATE_FORMAT]), default=None,
              help="Only habits scheduled on this day (default: today).")
@click.option("--all", "show_all", is_flag=True, default=False, help="List every habit.")
@click.pass_context
def list_command(ctx: click.Context, on_date, show_all: bool) -> None:
    """List habits scheduled for a day with their status and streak."""

    day = on_date.date() if on_date else _today(ctx)
    habits = _list_habits(ctx)
    if not show_all:
        habits = schedule.habits_for_day(habits, day)
    if not habits:
        click.echo("No habits for this day.")
        return

    for habit in habits:
        mark = _STATUS_MARKS[day_status(habit, day)]
        streak = current_streak(habit, _today(ctx))
        flame = f"  🔥{streak}" if streak > 0 else ""
        label = habit.habit_type.label if habit.habit_type else "Unknown"
        click.echo(f"[{habit.id}] {mark} {habit.emoji} {habit.name} ({label}){flame}")


@main.command("mark")
@click.argument("habit_id", type=int)
@click.option("--date", "on_date", type=click.DateTime(formats=[DATE_FORMAT]), default=None)
@click.option("--done/--not-done", "is_completed", default=None, help="Quantitative habits.")
@click.option("--quantity", type=int, default=None, help="Qualitative habits.")
@click.option("--rating", type=int, default=None, help="Scalable habits.")
@click.pass_context
def mark_command(ctx: click.Context, habit_id, on_date, is_completed, quantity, rating) -> None:
    """Record progress for a habit on a day."""

    habit = _load(ctx, habit_id)
    day = on_date.date() if on_date else _today(ctx)
    if not schedule.is_active(habit, day):
        raise click.ClickException("This habit isn't scheduled for this day")
    with _user_errors():
        tracking.record_day(
            repository=_app(ctx).habit_repo,
            habit=habit,
            day=day,
            is_completed=is_completed,
            quantity=quantity,
            scale_value=rating,
        )
    habit = _load(ctx, habit_id)
    click.echo(f"Recorded {habit.name} on {day.isoformat()}. Current streak: {current_streak(habit, _today(ctx))}")


@main.command("clear")
@click.argument("habit_id", type=int)
@click.option("--date", "on_date", type=click.DateTime(formats=[DATE_FORMAT]), required=True)
@click.pass_context
def clear_command(ctx: click.Context, habit_id, on_date) -> None:
    """Remove the record for a day."""

    habit = _load(ctx, habit_id)
    with _user_errors():
        removed = tracking.clear_day(repository=_app(ctx).habit_repo, habit=habit, day=on_date)
    click.echo("Record removed." if removed else "Nothing recorded for that day.")


@main.command("stats")
@click.argument("habit_id", type=int)
@click.option("--range", "time_range", type=click.Choice(["week", "month"]), default="week")
@click.option("--week-offset", type=int, default=0)
@click.pass_context
def stats_command(ctx: click.Context, habit_id, time_range, week_offset) -> None:
    """Show a habit's streaks, completion and chart series."""

    habit = _load(ctx, habit_id)
    today = _today(ctx)
    summary = stats.summarize_habit(habit, today=today)
    click.echo(f"{habit.emoji} {habit.name}")
    click.echo(f"Current streak: {summary.current_streak}")
    click.echo(f"Best streak: {summary.best_streak}")
    click.echo(f"Completion: {summary.completion_percentage}%")
    click.echo(f"Total days: {summary.total_days}")
    if summary.total_quantity is not None:
        click.echo(f"Total count: {summary.total_quantity}")
    if summary.average_rating is not None:
        click.echo(f"Avg rating: {summary.average_rating:.1f}")

    if time_range == "week":
        click.echo(f"Week {week_range_label(week_offset, today=today)}:")
        values = stats.weekly_series(habit, week_offset, today=today)
        labels = stats.week_labels(week_offset, today=today)
    else:
        click.echo("Last 4 weeks:")
        values = stats.monthly_series(habit, today=today)
        labels = stats.month_labels()
    for label, value in zip(labels, values):
        click.echo(f"  {label:<7} {value:g}")


@main.command("summary")
@click.pass_context
def summary_command(ctx: click.Context) -> None:
    """Show statistics across all habits."""

    habits = _list_habits(ctx)
    if not habits:
        click.echo("No stats to display. Add habits to see statistics.")
        return
    overall = stats.summarize_all(habits, today=_today(ctx))
    click.echo(f"Total habits: {overall.total_habits}")
    click.echo(f"Avg completion: {int(overall.average_completion)}%")
    click.echo(f"Best streak: {overall.best_current_streak}")
    click.echo(f"Active days: {overall.active_days}")


@main.command("chart")
@click.argument("habit_id", type=int)
@click.option("--range", "time_range", type=click.Choice(["week", "month"]), default="week")
@click.option("--week-offset", type=int, default=0)
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), required=True)
@click.pass_context
def chart_command(ctx: click.Context, habit_id, time_range, week_offset, output: Path) -> None:
    """Render a habit's week or month chart to a PNG file."""

    from .services import reports

    habit = _load(ctx, habit_id)
    today = _today(ctx)
    if time_range == "week":
        figure = reports.weekly_chart(habit, week_offset, today=today)
    else:
        figure = reports.monthly_chart(habit, today=today)
    path = reports.render_chart_png(figure, output)
    click.echo(f"Chart written: {path}")


@main.command("delete")
@click.argument("habit_id", type=int)
@click.confirmation_option(prompt="Delete this habit and all of its records?")
@click.pass_context
def delete_command(ctx: click.Context, habit_id) -> None:
    """Delete a habit and all of its records."""

    with _user_errors():
        tracking.delete_habit(repository=_app(ctx).habit_repo, habit_id=habit_id)
    click.echo(f"Deleted habit {habit_id}.")


if __name__ == "__main__":  # pragma: no cover
    main()
