"""CLI interface using Typer."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from fitplan import clock
from fitplan.config import get_settings
from fitplan.db import get_db, get_store
from fitplan.errors import FitplanError

app = typer.Typer(
    help="fitplan: daily workout and meal plans with progress analytics",
    no_args_is_help=True,
)
console = Console()

profile_app = typer.Typer(help="Manage the goal profile")
workout_app = typer.Typer(help="Today's workout plan")
meals_app = typer.Typer(help="Today's meal plan")
nutrition_app = typer.Typer(help="Nutrition goals, meal log and water")
mental_app = typer.Typer(help="Journal, breathing and mood stats")

app.add_typer(profile_app, name="profile")
app.add_typer(workout_app, name="workout")
app.add_typer(meals_app, name="meals")
app.add_typer(nutrition_app, name="nutrition")
app.add_typer(mental_app, name="mental")

state = {"user_id": "local", "json": False}


# ============================================================================
# Helpers
# ============================================================================


def output_json(response: dict) -> None:
    """Output JSON response to stdout."""
    print(json.dumps(response, indent=2, default=str))


def wants_json(json_output: bool) -> bool:
    """True for ``--json`` or when ``defaults.output_format`` is json."""
    return json_output or state["json"]


def parse_day(date_str: Optional[str]) -> date:
    """Parse a YYYY-MM-DD option, defaulting to the current UTC day."""
    if not date_str:
        return clock.utc_today()
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        raise typer.BadParameter(f"Expected YYYY-MM-DD, got '{date_str}'")


def fail(command: str, error: Exception, json_output: bool) -> None:
    """Report an engine error and exit with status 1."""
    if wants_json(json_output):
        output_json({
            "success": False,
            "command": command,
            "errors": [str(error)],
        })
    else:
        console.print(f"[red]{error}[/red]")
    raise typer.Exit(1)


def ensure_schema() -> None:
    """Ensure the documents table exists (idempotent)."""
    get_db().initialize_schema()


@app.callback()
def main(
    user: str = typer.Option("local", "--user", "-u", help="User ID to act as"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Daily plans and progress analytics."""
    state["user_id"] = user
    state["json"] = get_settings().defaults.output_format == "json"
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )
    ensure_schema()


# ============================================================================
# Setup
# ============================================================================


@app.command()
def init(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create the database and show what it holds."""
    db = get_db()
    db.initialize_schema()
    counts = db.collection_counts()
    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "init",
            "data": {"db_path": str(db.db_path), "collections": counts},
            "human_summary": f"Database ready at {db.db_path}",
        })
        return

    console.print(f"[green]Database ready at:[/green] {db.db_path}")
    for collection, count in counts.items():
        console.print(f"  {collection}: {count}")


@profile_app.command("set")
def profile_set(
    goal: Optional[str] = typer.Option(
        None, "--goal", help="weightLoss/muscleGain/endurance/flexibility/strength/general"
    ),
    level: Optional[str] = typer.Option(
        None, "--level", help="beginner/intermediate/advanced/expert"
    ),
    workouts: Optional[int] = typer.Option(None, "--workouts", help="Workouts per week"),
    gender: Optional[str] = typer.Option(None, "--gender", help="male/female/other"),
    age: Optional[int] = typer.Option(None, "--age", help="Age in years"),
    height: Optional[float] = typer.Option(None, "--height", help="Height in cm"),
    weight: Optional[float] = typer.Option(None, "--weight", help="Weight in kg"),
    target_weight: Optional[float] = typer.Option(
        None, "--target-weight", help="Target weight in kg"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Create or update the goal profile (also seeds nutrition goals)."""
    from fitplan.profiles import FitnessGoal, FitnessLevel, ProfileQueries
    from fitplan.profiles.body_calc import ensure_nutrition_goals
    from fitplan.profiles.models import VALID_GENDERS

    store = get_store()
    user_id = state["user_id"]
    profile, _ = ProfileQueries.get_or_create_profile(store, user_id)

    try:
        if goal is not None:
            profile.primary_goal = FitnessGoal(goal)
        if level is not None:
            profile.fitness_level = FitnessLevel(level)
        if gender is not None and gender not in VALID_GENDERS:
            raise ValueError(f"gender must be one of {VALID_GENDERS}, got '{gender}'")
    except ValueError as e:
        fail("profile set", e, json_output)

    if workouts is not None:
        profile.weekly_workouts = workouts
    info = profile.personal_info
    if gender is not None:
        info.gender = gender
    if age is not None:
        info.age = age
    if height is not None:
        info.height_cm = height
    if weight is not None:
        info.weight_kg = weight
    if target_weight is not None:
        info.target_weight_kg = target_weight

    ProfileQueries.save_profile(store, profile)
    goals = ensure_nutrition_goals(
        store, profile, get_settings().defaults.water_intake_ml
    )

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "profile set",
            "data": {"profile": profile.to_dict(), "nutrition_goals": goals.to_dict()},
            "human_summary": f"Saved profile for {user_id}",
        })
    else:
        console.print(
            f"[green]Saved profile:[/green] {profile.primary_goal.value} / "
            f"{profile.fitness_level.value}, {profile.weekly_workouts} workouts/week"
        )


@profile_app.command("show")
def profile_show(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the goal profile."""
    from fitplan.profiles import ProfileQueries

    user_id = state["user_id"]
    profile = ProfileQueries.get_profile(get_store(), user_id)
    if profile is None:
        if wants_json(json_output):
            output_json({
                "success": False,
                "command": "profile show",
                "errors": ["No profile found"],
                "suggestions": ["Create one with: fitplan profile set --goal general"],
            })
        else:
            console.print("[red]No profile found[/red]")
            console.print("Create one with: fitplan profile set --goal general")
        raise typer.Exit(1)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "profile show",
            "data": profile.to_dict(),
            "human_summary": f"{profile.primary_goal.value} / {profile.fitness_level.value}",
        })
        return

    info = profile.personal_info
    console.print(f"[bold]Profile ({user_id})[/bold]")
    console.print(f"  Goal: {profile.primary_goal.value}")
    console.print(f"  Level: {profile.fitness_level.value}")
    console.print(f"  Workouts/week: {profile.weekly_workouts}")
    if info.has_biometrics:
        console.print(f"  Age: {info.age}")
        console.print(f"  Height: {info.height_cm} cm")
        console.print(f"  Weight: {info.weight_kg} kg")
    if info.target_weight_kg:
        console.print(f"  Target weight: {info.target_weight_kg} kg")


@app.command()
def targets(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the daily calorie target and macro split."""
    from fitplan.profiles import ProfileQueries
    from fitplan.profiles.body_calc import calorie_target, macro_split

    profile, _ = ProfileQueries.get_or_create_profile(get_store(), state["user_id"])
    split = macro_split(calorie_target(profile), profile.primary_goal)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "targets",
            "data": {
                "calories": split.calories,
                "protein": split.protein,
                "carbs": split.carbs,
                "fat": split.fat,
            },
            "human_summary": f"{split.calories} kcal/day",
        })
        return

    table = Table(title=f"Daily Targets ({profile.primary_goal.value})")
    table.add_column("Target")
    table.add_column("Amount", justify="right")
    table.add_row("Calories", f"{split.calories} kcal")
    table.add_row("Protein", f"{split.protein} g")
    table.add_row("Carbs", f"{split.carbs} g")
    table.add_row("Fat", f"{split.fat} g")
    console.print(table)


# ============================================================================
# Workouts
# ============================================================================


def _workout_generator():
    from fitplan.planning import WorkoutPlanGenerator

    return WorkoutPlanGenerator(get_store(), retry=get_settings().retry)


@workout_app.command("today")
def workout_today(
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show (and create on first call) the day's workout."""
    day = parse_day(date_str)
    try:
        plan = _workout_generator().get_or_create_daily_workout(state["user_id"], day)
    except FitplanError as e:
        fail("workout today", e, json_output)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "workout today",
            "data": plan.to_dict(),
            "human_summary": f"{len(plan.exercises)} exercises, {plan.total_minutes} min",
        })
        return

    table = Table(title=f"Workout for {day}")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Exercise", style="cyan")
    table.add_column("Sets x Reps", justify="right")
    table.add_column("Minutes", justify="right")
    table.add_column("Done", justify="center")
    for i, exercise in enumerate(plan.exercises):
        table.add_row(
            str(i),
            exercise.name,
            f"{exercise.sets} x {exercise.reps}",
            str(exercise.duration_minutes),
            "[green]yes[/green]" if exercise.completed else "",
        )
    console.print(table)
    console.print(
        f"Total: {plan.total_minutes} min, ~{plan.estimated_calories:.0f} kcal"
    )
    if plan.completed:
        console.print("[bold green]Workout complete![/bold green]")


@workout_app.command("done")
def workout_done(
    index: int = typer.Argument(..., help="Exercise number from 'workout today'"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Mark an exercise as completed."""
    day = parse_day(date_str)
    try:
        result = _workout_generator().mark_exercise_complete(state["user_id"], day, index)
    except FitplanError as e:
        fail("workout done", e, json_output)

    remaining = sum(1 for e in result.exercises if not e.completed)
    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "workout done",
            "data": {
                "exercises": [e.to_dict() for e in result.exercises],
                "completed": result.completed,
            },
            "human_summary": f"{remaining} exercises remaining",
        })
    elif result.completed:
        console.print("[bold green]Workout complete![/bold green]")
    else:
        console.print(
            f"[green]Done:[/green] {result.exercises[index].name} "
            f"({remaining} remaining)"
        )


@workout_app.command("log")
def workout_log(
    exercise_id: str = typer.Argument(..., help="Exercise ID, e.g. squats"),
    minutes: float = typer.Argument(..., help="Session length in minutes"),
    sets: int = typer.Option(0, "--sets", "-s", help="Number of sets performed"),
    reps: Optional[int] = typer.Option(None, "--reps", "-r", help="Reps per set"),
    weight: Optional[float] = typer.Option(None, "--weight", "-w", help="Weight per set (kg)"),
    rating: Optional[int] = typer.Option(None, "--rating", help="How it felt, 1-5"),
    notes: Optional[str] = typer.Option(None, "--notes", help="Free-text notes"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a performed exercise session and update its running totals."""
    from fitplan.tracking import ProgressTracker, WorkoutSet

    tracker = ProgressTracker(get_store())
    try:
        log = tracker.log_workout(
            state["user_id"],
            exercise_id,
            minutes,
            sets=[WorkoutSet(reps=reps, weight=weight) for _ in range(sets)],
            notes=notes,
            rating=rating,
        )
    except ValueError as e:
        fail("workout log", e, json_output)
    progress = tracker.get_exercise_progress(state["user_id"], exercise_id)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "workout log",
            "data": {
                "log_id": log.log_id,
                **log.to_dict(),
                "progress": progress.to_dict(),
            },
            "human_summary": f"{exercise_id}: session {progress.total_sessions}",
        })
    else:
        console.print(
            f"[green]Logged {exercise_id}:[/green] {minutes:g} min "
            f"(session {progress.total_sessions}, {progress.total_duration:g} min total)"
        )


# ============================================================================
# Meals
# ============================================================================


def _meal_generator():
    from fitplan.planning import MealPlanGenerator

    return MealPlanGenerator(get_store(), config=get_settings().meal_plans)


@meals_app.command("today")
def meals_today(
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show (and create on first call) the day's meal plan."""
    day = parse_day(date_str)
    try:
        plan = _meal_generator().get_or_create_daily_meal_plan(state["user_id"], day)
    except FitplanError as e:
        fail("meals today", e, json_output)

    total = plan.total_nutrition
    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "meals today",
            "data": plan.to_dict(),
            "human_summary": f"{len(plan.meals)} meals, {total.calories:.0f} kcal",
        })
        return

    table = Table(title=f"Meals for {day}")
    table.add_column("Slot", style="dim")
    table.add_column("Recipe", style="cyan")
    slots = ["Breakfast", "Lunch", "Dinner"] + ["Snack"] * len(plan.snacks)
    for slot, meal in zip(slots, plan.meals):
        table.add_row(slot, meal.name)
    console.print(table)
    console.print(
        f"Total: {total.calories:.0f} kcal | P {total.protein:.0f}g "
        f"C {total.carbs:.0f}g F {total.fat:.0f}g"
    )
    if plan.completed:
        console.print("[bold green]Completed today[/bold green]")


@meals_app.command("done")
def meals_done(
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Mark the day's meal plan as completed."""
    day = parse_day(date_str)
    try:
        _meal_generator().mark_meal_plan_complete(state["user_id"], day)
    except FitplanError as e:
        fail("meals done", e, json_output)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "meals done",
            "data": {"date": day.isoformat(), "completed": True},
            "human_summary": f"Meal plan for {day} completed",
        })
    else:
        console.print(f"[green]Meal plan for {day} completed[/green]")


# ============================================================================
# Nutrition
# ============================================================================


def _logbook():
    from fitplan.nutrition.logbook import NutritionLogBook

    return NutritionLogBook(get_store())


@nutrition_app.command("goals")
def nutrition_goals(
    calories: Optional[float] = typer.Option(None, "--calories", help="Daily calories"),
    protein: Optional[float] = typer.Option(None, "--protein", help="Protein (g)"),
    carbs: Optional[float] = typer.Option(None, "--carbs", help="Carbs (g)"),
    fat: Optional[float] = typer.Option(None, "--fat", help="Fat (g)"),
    water: Optional[float] = typer.Option(None, "--water", help="Water (ml)"),
    restrict: Optional[list[str]] = typer.Option(
        None, "--restrict", "-r", help="Dietary restriction (e.g., vegan, glutenFree)"
    ),
    exclude: Optional[list[str]] = typer.Option(
        None, "--exclude", "-x", help="Ingredient to never plan"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show nutrition goals, updating any fields given."""
    from fitplan.nutrition.models import DietaryRestriction
    from fitplan.profiles import ProfileQueries
    from fitplan.profiles.body_calc import ensure_nutrition_goals

    store = get_store()
    profile, _ = ProfileQueries.get_or_create_profile(store, state["user_id"])
    goals = ensure_nutrition_goals(
        store, profile, get_settings().defaults.water_intake_ml
    )

    changed = False
    if calories is not None:
        goals.daily_calories = calories
        changed = True
    if protein is not None:
        goals.macros.protein = protein
        changed = True
    if carbs is not None:
        goals.macros.carbs = carbs
        changed = True
    if fat is not None:
        goals.macros.fat = fat
        changed = True
    if water is not None:
        goals.water_intake_ml = water
        changed = True
    if restrict:
        try:
            goals.dietary_restrictions = {DietaryRestriction(r) for r in restrict}
        except ValueError as e:
            fail("nutrition goals", e, json_output)
        changed = True
    if exclude:
        goals.excluded_ingredients = set(exclude)
        changed = True

    if changed:
        _logbook().save_goals(goals)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "nutrition goals",
            "data": goals.to_dict(),
            "human_summary": f"{goals.daily_calories:.0f} kcal/day",
        })
        return

    restrictions = ", ".join(sorted(r.value for r in goals.dietary_restrictions))
    excluded = ", ".join(sorted(goals.excluded_ingredients))
    console.print(
        Panel(
            f"Calories: {goals.daily_calories:.0f} kcal\n"
            f"Protein: {goals.macros.protein:.0f} g\n"
            f"Carbs: {goals.macros.carbs:.0f} g\n"
            f"Fat: {goals.macros.fat:.0f} g\n"
            f"Water: {goals.water_intake_ml:.0f} ml\n"
            f"Restrictions: {restrictions or 'none'}\n"
            f"Excluded: {excluded or 'none'}",
            title="Nutrition Goals",
        )
    )


@nutrition_app.command("log")
def nutrition_log(
    meal_type: str = typer.Argument(..., help="breakfast/lunch/dinner/snack"),
    recipe: Optional[str] = typer.Option(None, "--recipe", help="Catalog recipe ID"),
    name: Optional[str] = typer.Option(None, "--name", help="Meal name"),
    calories: float = typer.Option(0, "--calories", help="Calories per serving"),
    protein: float = typer.Option(0, "--protein", help="Protein per serving (g)"),
    carbs: float = typer.Option(0, "--carbs", help="Carbs per serving (g)"),
    fat: float = typer.Option(0, "--fat", help="Fat per serving (g)"),
    servings: float = typer.Option(1, "--servings", "-s", help="Servings eaten"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a meal by catalog recipe or by its nutrition."""
    from fitplan.nutrition.models import MealType
    from fitplan.nutrition.vector import NutritionVector

    day = parse_day(date_str)
    try:
        kind = MealType(meal_type)
        nutrition = None
        if recipe is None:
            nutrition = NutritionVector(
                calories=calories, protein=protein, carbs=carbs, fat=fat
            )
        log = _logbook().log_meal(
            state["user_id"],
            day,
            kind,
            recipe_id=recipe,
            name=name,
            nutrition=nutrition,
            servings=servings,
        )
    except (FitplanError, ValueError) as e:
        fail("nutrition log", e, json_output)

    total = log.total_nutrition
    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "nutrition log",
            "data": log.to_dict(),
            "human_summary": f"{log.meal_count} meals, {total.calories:.0f} kcal today",
        })
    else:
        console.print(
            f"[green]Logged {meal_type}.[/green] Today: {total.calories:.0f} kcal "
            f"across {log.meal_count} meals"
        )


@nutrition_app.command("water")
def nutrition_water(
    amount: float = typer.Argument(..., help="Water drunk (ml)"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Date (YYYY-MM-DD, default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Add water to the day's intake."""
    day = parse_day(date_str)
    try:
        log = _logbook().add_water(state["user_id"], day, amount)
    except ValueError as e:
        fail("nutrition water", e, json_output)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "nutrition water",
            "data": {"date": day.isoformat(), "water_intake_ml": log.water_intake_ml},
            "human_summary": f"{log.water_intake_ml:.0f} ml today",
        })
    else:
        console.print(f"[green]Water today:[/green] {log.water_intake_ml:.0f} ml")


@nutrition_app.command("summary")
def nutrition_summary(
    days: int = typer.Option(7, "--days", help="Number of days to average"),
    date_str: Optional[str] = typer.Option(
        None, "--date", "-d", help="Last day of the range (default: today)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Average intake and adherence over recent days."""
    end = parse_day(date_str)
    summary = _logbook().summary(state["user_id"], end, days)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "nutrition summary",
            "data": summary or {},
            "human_summary": (
                f"Adherence {summary['adherence_rate']}% over {summary['days']} days"
                if summary
                else "No nutrition logged in range"
            ),
        })
        return

    if summary is None:
        console.print("[yellow]No nutrition logged in range[/yellow]")
        return

    table = Table(title=f"Averages over {summary['days']} logged days")
    table.add_column("Metric")
    table.add_column("Average", justify="right")
    table.add_row("Calories", f"{summary['calories']} kcal")
    table.add_row("Protein", f"{summary['protein']} g")
    table.add_row("Carbs", f"{summary['carbs']} g")
    table.add_row("Fat", f"{summary['fat']} g")
    table.add_row("Water", f"{summary['water_intake_ml']} ml")
    table.add_row("Adherence", f"{summary['adherence_rate']}%")
    console.print(table)


# ============================================================================
# Mental
# ============================================================================


def _mental_records():
    from fitplan.mental import MentalHealthStatsEngine, MentalRecords

    store = get_store()
    stats = MentalHealthStatsEngine(store, config=get_settings().mental)
    return MentalRecords(store, stats=stats, progress=stats.progress)


@mental_app.command("journal")
def mental_journal(
    content: str = typer.Argument(..., help="Journal text"),
    mood: int = typer.Option(3, "--mood", "-m", help="Mood 1 (low) to 5 (high)"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Mood tag"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Write a journal entry."""
    try:
        entry = _mental_records().add_journal_entry(
            state["user_id"], content, mood=mood, mood_tags=tag or []
        )
    except ValueError as e:
        fail("mental journal", e, json_output)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "mental journal",
            "data": {"entry_id": entry.entry_id, **entry.to_dict()},
            "human_summary": "Journal entry saved",
        })
    else:
        console.print("[green]Journal entry saved[/green]")


@mental_app.command("breathe")
def mental_breathe(
    seconds: float = typer.Argument(..., help="Session length in seconds"),
    pattern: str = typer.Option("box", "--pattern", "-p", help="box/478/deep"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Log a finished breathing session."""
    from fitplan.mental import BREATHING_PATTERNS

    if pattern not in BREATHING_PATTERNS:
        fail(
            "mental breathe",
            ValueError(f"Unknown pattern '{pattern}'; choose from {sorted(BREATHING_PATTERNS)}"),
            json_output,
        )
    try:
        session = _mental_records().log_breathing_session(
            state["user_id"], seconds, pattern=BREATHING_PATTERNS[pattern]
        )
    except ValueError as e:
        fail("mental breathe", e, json_output)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "mental breathe",
            "data": {"session_id": session.session_id, **session.to_dict()},
            "human_summary": f"{session.completed_repetitions} breathing cycles",
        })
    else:
        console.print(
            f"[green]Logged {session.pattern.name}:[/green] "
            f"{session.completed_repetitions} cycles"
        )


@mental_app.command("mood")
def mental_mood(
    mood: str = typer.Argument(..., help="great/good/okay/bad/terrible"),
    note: Optional[str] = typer.Option(None, "--note", "-n", help="Short note"),
    breathing_done: bool = typer.Option(
        False, "--breathing-done", help="Also mark today's breathing exercise done"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Record today's mood check-in."""
    records = _mental_records()
    try:
        entry = records.log_mood(state["user_id"], mood, journal_entry=note)
        if breathing_done:
            entry = records.mark_breathing_complete(entry.entry_id)
    except (ValueError, FitplanError) as e:
        fail("mental mood", e, json_output)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "mental mood",
            "data": {"entry_id": entry.entry_id, **entry.to_dict()},
            "human_summary": f"Feeling {entry.mood} today",
        })
    else:
        console.print(f"[green]Checked in:[/green] feeling {entry.mood}")


@mental_app.command("history")
def mental_history(
    days: int = typer.Option(7, "--days", help="How many days back to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show recent mood check-ins, newest first."""
    entries = _mental_records().get_mood_history(state["user_id"], days=days)

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "mental history",
            "data": [{"entry_id": e.entry_id, **e.to_dict()} for e in entries],
            "human_summary": f"{len(entries)} check-ins in {days} days",
        })
        return

    if not entries:
        console.print("[yellow]No check-ins in range[/yellow]")
        return
    table = Table(title=f"Mood over the last {days} days")
    table.add_column("Date")
    table.add_column("Mood", style="cyan")
    table.add_column("Breathing", justify="center")
    table.add_column("Note")
    for entry in entries:
        table.add_row(
            entry.date.date().isoformat(),
            entry.mood,
            "[green]yes[/green]" if entry.completed_breathing else "",
            entry.journal_entry or "",
        )
    console.print(table)


@mental_app.command("search")
def mental_search(
    term: Optional[str] = typer.Option(None, "--term", help="Text to find in entries"),
    mood: Optional[int] = typer.Option(None, "--mood", "-m", help="Exact mood 1-5"),
    tag: Optional[list[str]] = typer.Option(None, "--tag", "-t", help="Any of these tags"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Search journal entries, newest first."""
    entries = _mental_records().search_journal_entries(
        state["user_id"], mood=mood, mood_tags=tag or None, search_term=term
    )

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "mental search",
            "data": [{"entry_id": e.entry_id, **e.to_dict()} for e in entries],
            "human_summary": f"{len(entries)} matching entries",
        })
        return

    if not entries:
        console.print("[yellow]No matching entries[/yellow]")
        return
    for entry in entries:
        tags = ", ".join(entry.mood_tags)
        console.print(
            f"[dim]{entry.date:%Y-%m-%d %H:%M}[/dim] mood {entry.mood}"
            + (f" [cyan]{tags}[/cyan]" if tags else "")
        )
        console.print(f"  {entry.content}")


@mental_app.command("stats")
def mental_stats(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Recompute and show mood and mindfulness stats."""
    stats = _mental_records().stats.refresh(state["user_id"], clock.utc_now())

    if wants_json(json_output):
        output_json({
            "success": True,
            "command": "mental stats",
            "data": stats.to_dict(),
            "human_summary": f"Mood {stats.average_mood} ({stats.mood_trend.value})",
        })
        return

    tags = ", ".join(stats.common_mood_tags) or "none"
    console.print(
        Panel(
            f"Average mood: {stats.average_mood} ({stats.mood_trend.value})\n"
            f"Common tags: {tags}\n"
            f"Journal streak: {stats.journal_streak} days\n"
            f"Breathing today: {stats.breathing_minutes} min\n"
            f"Active motivations: {stats.active_motivations}",
            title=f"Mental Health ({stats.date})",
        )
    )


if __name__ == "__main__":
    app()
