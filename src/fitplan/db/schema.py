"""SQLite database schema definitions."""

SCHEMA_SQL = """
-- Every collection shares one table; documents are JSON bodies
CREATE TABLE IF NOT EXISTS documents (
    collection TEXT NOT NULL,
    doc_key TEXT NOT NULL,
    body TEXT NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (collection, doc_key)
);

CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection);
"""

# Collection names used by the engine
DAILY_WORKOUTS = "dailyWorkouts"
DAILY_MEAL_PLANS = "dailyMealPlans"
NUTRITION_LOGS = "nutritionLogs"
NUTRITION_GOALS = "nutritionGoals"
NUTRITION_PROGRESS = "nutritionProgress"
MENTAL_HEALTH_STATS = "mentalHealthStats"
JOURNAL_ENTRIES = "journalEntries"
BREATHING_SESSIONS = "breathingSessions"
MOTIVATIONS = "motivations"
PROFILES = "profiles"
PROGRESS = "progress"
DAILY_ACTIVITY = "dailyActivity"
WORKOUT_LOGS = "workoutLogs"
EXERCISE_PROGRESS = "exerciseProgress"
MOOD_ENTRIES = "moodEntries"


def get_schema_sql() -> str:
    """Return the complete schema SQL."""
    return SCHEMA_SQL
