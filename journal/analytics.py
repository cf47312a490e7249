"""Statistics derived from a user's journals.

Everything here is a pure function of the journals passed in (anything with
``created_at`` and ``mood`` attributes works).  Nothing is persisted; results
are recomputed on every request.  Calendar days are taken from ``created_at``
as stored (UTC).
"""

from collections import Counter
from datetime import datetime, timedelta

from .models import DEFAULT_MOOD

WEEK = timedelta(days=7)

# (name, icon, description, metric, threshold). Rules are independent; every
# satisfied rule is reported, in table order.
ACHIEVEMENTS = (
    ('First Entry', '📝', 'Wrote your first journal entry', 'entries', 1),
    ('Getting Started', '🌱', 'Wrote 5 journal entries', 'entries', 5),
    ('Dedicated Writer', '✍️', 'Wrote 10 journal entries', 'entries', 10),
    ('Journal Master', '🏆', 'Wrote 30 journal entries', 'entries', 30),
    ('3 Day Streak', '🔥', 'Journaled 3 days in a row', 'streak', 3),
    ('Week Warrior', '⚡', 'Journaled 7 days in a row', 'streak', 7),
    ('Monthly Legend', '👑', 'Journaled 30 days in a row', 'streak', 30),
    ('Emotion Explorer', '🎭', 'Logged happy, sad, excited and calm moods', 'moods',
     frozenset({'happy', 'sad', 'excited', 'calm'})),
)

_CHECKS = {
    'entries': lambda progress, threshold: progress['entries'] >= threshold,
    'streak': lambda progress, threshold: progress['streak'] >= threshold,
    'moods': lambda progress, required: required <= progress['moods'],
}


def _day(journal):
    return journal.created_at.date()


def weekly_activity(journals, now=None):
    """Entry counts per ISO date over the trailing 7 days; empty days omitted."""
    now = now or datetime.utcnow()
    cutoff = now - WEEK
    counts = Counter(
        _day(journal).isoformat()
        for journal in journals
        if cutoff < journal.created_at <= now
    )
    return dict(sorted(counts.items()))


def weekly_series(journals, now=None):
    """Seven zero-filled slots, oldest first, ending today. Used for charts."""
    today = (now or datetime.utcnow()).date()
    counts = Counter(_day(journal) for journal in journals)
    series = []
    for offset in range(6, -1, -1):
        day = today - timedelta(days=offset)
        series.append({
            'date': day.isoformat(),
            'day': day.strftime('%a'),
            'entries': counts.get(day, 0),
        })
    return series


def mood_distribution(journals):
    counts = Counter(journal.mood or DEFAULT_MOOD for journal in journals)
    return dict(counts)


def writing_streak(journals, today=None):
    """Consecutive journaling days ending at the most recent entry.

    Days are UTC calendar days of the naive-UTC ``created_at``, and ``today``
    defaults to the current UTC date. The most recent entry must be from
    today or yesterday, otherwise the streak is 0."""
    days = sorted({_day(journal) for journal in journals}, reverse=True)
    if not days:
        return 0

    today = today or datetime.utcnow().date()
    if (today - days[0]).days > 1:
        return 0

    streak = 1
    for previous, current in zip(days, days[1:]):
        if (previous - current).days != 1:
            break
        streak += 1
    return streak


def achievements(journals, streak=None, today=None):
    journals = list(journals)
    if streak is None:
        streak = writing_streak(journals, today=today)
    progress = {
        'entries': len(journals),
        'streak': streak,
        'moods': {journal.mood for journal in journals},
    }
    return [
        {'name': name, 'icon': icon, 'description': description}
        for name, icon, description, metric, threshold in ACHIEVEMENTS
        if _CHECKS[metric](progress, threshold)
    ]


def summary(journals, now=None):
    now = now or datetime.utcnow()
    journals = list(journals)
    streak = writing_streak(journals, today=now.date())
    return {
        'total': len(journals),
        'this_week': sum(1 for journal in journals if now - WEEK < journal.created_at <= now),
        'streak': streak,
        'moods': mood_distribution(journals),
        'achievements': achievements(journals, streak=streak),
    }
