# KV keys, one JSON document per key
COLLECTIONS = {
    'checklists': 'checklists',
    'checklist_tasks': 'checklist-tasks',
    'daily_progress': 'daily-progress',
    'incidencias': 'incidencias',  # ordered id index, newest first
    'incidencia': 'incidencia',
    'appcc_registros': 'appcc-registros',
    'equipment': 'equipment',
    'historico': 'historico',
    'exams': 'exams',
    'exam_results': 'exam-results',
    'messages': 'messages',
    'profiles': 'profile',
}


def daily_progress_key(day: str) -> str:
    """Progress is bucketed per UTC day: daily-progress:YYYY-MM-DD"""
    return f"{COLLECTIONS['daily_progress']}:{day}"


def profile_key(user_id: str) -> str:
    return f"{COLLECTIONS['profiles']}:{user_id}"


PROFILE_PREFIX = f"{COLLECTIONS['profiles']}:"


def incidencia_key(incidencia_id: str) -> str:
    """One document per incidencia: photos are stored inline"""
    return f"{COLLECTIONS['incidencia']}:{incidencia_id}"
