"""Built-in exercise catalog keyed by fitness goal and level.

Each (goal, level) slice lists the exercises of that day's workout in
order. Combinations without a slice (for example any "expert" level)
fall back to general / beginner in the catalog provider.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from fitplan.catalog.models import ExerciseTemplate
from fitplan.profiles.models import FitnessGoal, FitnessLevel


def _exercise(
    exercise_id: str,
    name: str,
    muscle_groups: list[str],
    equipment: list[str],
    difficulty: str,
    instructions: list[str],
    tips: list[str],
    duration_minutes: int,
    calories_per_minute: float,
    sets: Optional[int] = None,
    reps: Optional[int] = None,
) -> ExerciseTemplate:
    """Create an immutable exercise template."""
    return ExerciseTemplate(
        exercise_id=exercise_id,
        name=name,
        muscle_groups=frozenset(muscle_groups),
        equipment=frozenset(equipment),
        difficulty=difficulty,
        instructions=tuple(instructions),
        tips=tuple(tips),
        duration_minutes=duration_minutes,
        calories_per_minute=calories_per_minute,
        sets=sets,
        reps=reps,
    )


# =============================================================================
# Bodyweight
# =============================================================================

PUSH_UPS = _exercise(
    "push-ups",
    "Push-ups",
    ["chest", "shoulders", "triceps"],
    ["bodyweight"],
    "beginner",
    [
        "Start in a plank position",
        "Lower your body until your chest nearly touches the ground",
        "Push back up to the starting position",
    ],
    ["Keep your core tight", "Don't let your hips sag", "Breathe steadily"],
    duration_minutes=5,
    calories_per_minute=7,
)

SQUATS = _exercise(
    "squats",
    "Squats",
    ["legs", "core"],
    ["bodyweight"],
    "beginner",
    [
        "Stand with feet shoulder-width apart",
        "Lower your body as if sitting back into a chair",
        "Keep your chest up and back straight",
        "Return to standing position",
    ],
    [
        "Keep your knees in line with your toes",
        "Go as low as comfortable",
        "Keep your weight in your heels",
    ],
    duration_minutes=5,
    calories_per_minute=8,
)

PLANK = _exercise(
    "plank",
    "Plank",
    ["core", "shoulders"],
    ["bodyweight"],
    "beginner",
    [
        "Rest on your forearms with elbows under shoulders",
        "Extend your legs and lift your hips",
        "Hold a straight line from head to heels for 30-45 seconds",
    ],
    ["Squeeze your glutes", "Look at the floor to keep your neck neutral"],
    duration_minutes=5,
    calories_per_minute=4,
    reps=1,
)

GLUTE_BRIDGE = _exercise(
    "glute-bridge",
    "Glute Bridge",
    ["legs", "core"],
    ["bodyweight"],
    "beginner",
    [
        "Lie on your back with knees bent and feet flat",
        "Drive through your heels to lift your hips",
        "Pause at the top, then lower slowly",
    ],
    ["Avoid arching your lower back"],
    duration_minutes=5,
    calories_per_minute=5,
    reps=15,
)

JUMPING_JACKS = _exercise(
    "jumping-jacks",
    "Jumping Jacks",
    ["fullBody"],
    ["bodyweight"],
    "beginner",
    [
        "Stand with feet together and arms at your sides",
        "Jump feet apart while raising arms overhead",
        "Jump back to the starting position",
    ],
    ["Land softly on the balls of your feet", "Keep a steady rhythm"],
    duration_minutes=10,
    calories_per_minute=9,
    reps=30,
)

MOUNTAIN_CLIMBERS = _exercise(
    "mountain-climbers",
    "Mountain Climbers",
    ["core", "fullBody"],
    ["bodyweight"],
    "intermediate",
    [
        "Start in a high plank position",
        "Drive one knee toward your chest",
        "Switch legs quickly, alternating sides",
    ],
    ["Keep your hips level", "Move at a pace you can sustain"],
    duration_minutes=8,
    calories_per_minute=10,
    sets=4,
    reps=20,
)

BURPEES = _exercise(
    "burpees",
    "Burpees",
    ["fullBody"],
    ["bodyweight"],
    "advanced",
    [
        "Squat down and place your hands on the floor",
        "Jump your feet back into a plank",
        "Perform a push-up",
        "Jump your feet forward and explode upward",
    ],
    ["Keep your core braced in the plank", "Scale by stepping instead of jumping"],
    duration_minutes=10,
    calories_per_minute=12,
    sets=4,
    reps=10,
)

PULL_UPS = _exercise(
    "pull-ups",
    "Pull-ups",
    ["back", "biceps"],
    ["bodyweight", "other"],
    "advanced",
    [
        "Hang from a bar with an overhand grip",
        "Pull until your chin clears the bar",
        "Lower under control to a full hang",
    ],
    ["Avoid swinging", "Lead with your chest"],
    duration_minutes=10,
    calories_per_minute=8,
    sets=4,
    reps=8,
)

STEADY_JOG = _exercise(
    "steady-jog",
    "Steady Jog",
    ["legs", "fullBody"],
    ["bodyweight"],
    "beginner",
    [
        "Warm up with five minutes of brisk walking",
        "Jog at a conversational pace",
        "Cool down with a slow walk",
    ],
    ["You should be able to talk in full sentences"],
    duration_minutes=20,
    calories_per_minute=9,
    sets=1,
    reps=1,
)

# =============================================================================
# Free weights and machines
# =============================================================================

GOBLET_SQUAT = _exercise(
    "goblet-squat",
    "Goblet Squat",
    ["legs", "core"],
    ["kettlebell", "dumbbell"],
    "intermediate",
    [
        "Hold a kettlebell at chest height",
        "Squat down keeping elbows inside the knees",
        "Stand back up by driving through your heels",
    ],
    ["Keep the weight close to your body", "Sit between your heels"],
    duration_minutes=10,
    calories_per_minute=7,
    reps=10,
)

DUMBBELL_BENCH_PRESS = _exercise(
    "dumbbell-bench-press",
    "Dumbbell Bench Press",
    ["chest", "triceps", "shoulders"],
    ["dumbbell"],
    "intermediate",
    [
        "Lie on a bench holding a dumbbell in each hand",
        "Press the dumbbells up until arms are extended",
        "Lower slowly to chest level",
    ],
    ["Keep your feet flat on the floor", "Don't bounce the weights"],
    duration_minutes=12,
    calories_per_minute=6,
    sets=4,
    reps=10,
)

BENT_OVER_ROW = _exercise(
    "bent-over-row",
    "Bent-over Dumbbell Row",
    ["back", "biceps"],
    ["dumbbell"],
    "intermediate",
    [
        "Hinge at the hips with a flat back",
        "Row the dumbbells toward your hips",
        "Lower with control",
    ],
    ["Squeeze your shoulder blades together"],
    duration_minutes=10,
    calories_per_minute=6,
    sets=4,
    reps=10,
)

OVERHEAD_PRESS = _exercise(
    "overhead-press",
    "Overhead Press",
    ["shoulders", "triceps"],
    ["dumbbell"],
    "intermediate",
    [
        "Stand holding dumbbells at shoulder height",
        "Press overhead until arms are straight",
        "Lower back to the shoulders",
    ],
    ["Brace your core", "Don't lean back"],
    duration_minutes=10,
    calories_per_minute=6,
    reps=10,
)

BARBELL_BACK_SQUAT = _exercise(
    "barbell-back-squat",
    "Barbell Back Squat",
    ["legs", "core"],
    ["barbell"],
    "advanced",
    [
        "Set the bar across your upper back",
        "Unrack and step back with feet shoulder-width apart",
        "Squat to at least parallel",
        "Drive up to standing",
    ],
    ["Keep your chest up", "Brace before each rep"],
    duration_minutes=15,
    calories_per_minute=8,
    sets=5,
    reps=5,
)

BARBELL_DEADLIFT = _exercise(
    "barbell-deadlift",
    "Barbell Deadlift",
    ["back", "legs"],
    ["barbell"],
    "advanced",
    [
        "Stand with mid-foot under the bar",
        "Grip the bar just outside your legs",
        "Push the floor away, keeping the bar close",
        "Lock out hips and knees together",
    ],
    ["Keep a neutral spine", "Reset between reps"],
    duration_minutes=15,
    calories_per_minute=8,
    sets=5,
    reps=5,
)

JUMP_ROPE = _exercise(
    "jump-rope",
    "Jump Rope Intervals",
    ["fullBody", "legs"],
    ["other"],
    "intermediate",
    [
        "Jump rope for 60 seconds",
        "Rest for 30 seconds",
        "Repeat for the prescribed sets",
    ],
    ["Turn the rope with your wrists", "Stay light on your feet"],
    duration_minutes=15,
    calories_per_minute=11,
    sets=5,
    reps=60,
)

CYCLING_INTERVALS = _exercise(
    "cycling-intervals",
    "Cycling Intervals",
    ["legs", "fullBody"],
    ["machine"],
    "intermediate",
    [
        "Warm up for five minutes at an easy pace",
        "Alternate one minute hard with two minutes easy",
        "Cool down for five minutes",
    ],
    ["Adjust the seat to hip height"],
    duration_minutes=25,
    calories_per_minute=10,
    sets=6,
    reps=1,
)

# =============================================================================
# Mobility
# =============================================================================

SUN_SALUTATION = _exercise(
    "sun-salutation",
    "Sun Salutation Flow",
    ["fullBody"],
    ["bodyweight"],
    "beginner",
    [
        "Reach overhead, then fold forward",
        "Step back into a plank and lower down",
        "Lift into upward dog, then push back to downward dog",
        "Step forward and rise to standing",
    ],
    ["Move with your breath"],
    duration_minutes=10,
    calories_per_minute=3,
    sets=2,
    reps=5,
)

HAMSTRING_STRETCH = _exercise(
    "hamstring-stretch",
    "Standing Hamstring Stretch",
    ["legs"],
    ["bodyweight"],
    "beginner",
    [
        "Place one heel on a low step",
        "Hinge forward from the hips until you feel a stretch",
        "Hold for 30 seconds and switch sides",
    ],
    ["Keep your back flat", "Never bounce"],
    duration_minutes=5,
    calories_per_minute=2,
    sets=2,
    reps=2,
)

CAT_COW = _exercise(
    "cat-cow",
    "Cat-Cow",
    ["back", "core"],
    ["bodyweight"],
    "beginner",
    [
        "Start on hands and knees",
        "Arch your back while lifting your head",
        "Round your back while tucking your chin",
    ],
    ["Inhale into cow, exhale into cat"],
    duration_minutes=5,
    calories_per_minute=2,
    sets=2,
    reps=10,
)

PIGEON_POSE = _exercise(
    "pigeon-pose",
    "Pigeon Pose",
    ["legs"],
    ["bodyweight"],
    "intermediate",
    [
        "From downward dog bring one knee behind the same wrist",
        "Extend the back leg and square your hips",
        "Hold for 45 seconds per side",
    ],
    ["Support your hip with a block if needed"],
    duration_minutes=6,
    calories_per_minute=2,
    sets=2,
    reps=2,
)


# =============================================================================
# Catalog slices
# =============================================================================

_G = FitnessGoal
_L = FitnessLevel

EXERCISE_CATALOG: Mapping[FitnessGoal, Mapping[FitnessLevel, tuple[ExerciseTemplate, ...]]] = MappingProxyType({
    _G.GENERAL: MappingProxyType({
        _L.BEGINNER: (PUSH_UPS, SQUATS, PLANK),
        _L.INTERMEDIATE: (GOBLET_SQUAT, DUMBBELL_BENCH_PRESS, BENT_OVER_ROW),
    }),
    _G.WEIGHT_LOSS: MappingProxyType({
        _L.BEGINNER: (JUMPING_JACKS, SQUATS),
        _L.INTERMEDIATE: (MOUNTAIN_CLIMBERS, JUMP_ROPE, GOBLET_SQUAT),
        _L.ADVANCED: (BURPEES, JUMP_ROPE, BARBELL_BACK_SQUAT),
    }),
    _G.MUSCLE_GAIN: MappingProxyType({
        _L.BEGINNER: (PUSH_UPS, GOBLET_SQUAT, BENT_OVER_ROW),
        _L.INTERMEDIATE: (
            DUMBBELL_BENCH_PRESS, BENT_OVER_ROW, OVERHEAD_PRESS, GOBLET_SQUAT,
        ),
        _L.ADVANCED: (BARBELL_BACK_SQUAT, BARBELL_DEADLIFT, PULL_UPS, OVERHEAD_PRESS),
    }),
    _G.STRENGTH: MappingProxyType({
        _L.BEGINNER: (GOBLET_SQUAT, PUSH_UPS, GLUTE_BRIDGE),
        _L.INTERMEDIATE: (BARBELL_BACK_SQUAT, OVERHEAD_PRESS, BENT_OVER_ROW),
        _L.ADVANCED: (BARBELL_DEADLIFT, BARBELL_BACK_SQUAT, PULL_UPS),
    }),
    _G.ENDURANCE: MappingProxyType({
        _L.BEGINNER: (STEADY_JOG, JUMPING_JACKS),
        _L.INTERMEDIATE: (CYCLING_INTERVALS, JUMP_ROPE, MOUNTAIN_CLIMBERS),
    }),
    _G.FLEXIBILITY: MappingProxyType({
        _L.BEGINNER: (SUN_SALUTATION, HAMSTRING_STRETCH, CAT_COW),
        _L.INTERMEDIATE: (SUN_SALUTATION, PIGEON_POSE, HAMSTRING_STRETCH),
    }),
})
