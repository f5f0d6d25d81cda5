"""User search service using exact and fuzzy matching."""

from typing import List, Optional, Tuple
import re

from django.conf import settings
from django.contrib.auth import get_user_model
from fuzzywuzzy import fuzz

User = get_user_model()

MAX_RESULTS = 10

# Only this many candidates are scored with fuzzy matching
FUZZY_CANDIDATE_LIMIT = 200


def normalize_text(text: str) -> str:
    """
    Normalize text for comparison.

    Args:
        text: Text to normalize

    Returns:
        Normalized lowercase text
    """
    text = text.lower().strip()
    text = re.sub(r'\s+', ' ', text)
    text = re.sub(r'[^\w\s-]', '', text)
    return text


def search_users(
    *,
    query: str,
    exclude_user=None,
    threshold: Optional[int] = None
) -> List[Tuple[User, int, str]]:
    """
    Find users by username or name.

    Args:
        query: Username or name fragment
        exclude_user: User to leave out of the results (usually the caller)
        threshold: Minimum fuzzy similarity score (0-100)

    Returns:
        List of (user, similarity_score, match_type) tuples, best first
        match_type: 'exact', 'partial', 'fuzzy'
    """
    if threshold is None:
        threshold = settings.USER_SEARCH_THRESHOLD

    query_norm = normalize_text(query)
    if not query_norm:
        return []

    users = User.objects.filter(is_active=True, deleted_at__isnull=True)
    if exclude_user is not None:
        users = users.exclude(id=exclude_user.id)

    # Step 1: exact username match wins outright
    exact = users.filter(username=query_norm).first()
    if exact:
        return [(exact, 100, 'exact')]

    candidates = []
    seen = set()

    # Step 2: substring matches on username or name
    for user in users.filter(username__icontains=query_norm)[:MAX_RESULTS]:
        candidates.append((user, 90, 'partial'))
        seen.add(user.id)
    for user in users.filter(name__icontains=query_norm)[:MAX_RESULTS]:
        if user.id not in seen:
            candidates.append((user, 85, 'partial'))
            seen.add(user.id)

    # Step 3: fuzzy matching for typos
    for user in users.exclude(id__in=seen)[:FUZZY_CANDIDATE_LIMIT]:
        score = max(
            fuzz.ratio(query_norm, user.username),
            fuzz.ratio(query_norm, normalize_text(user.name)) if user.name else 0,
        )
        if score >= threshold:
            candidates.append((user, score, 'fuzzy'))

    candidates.sort(key=lambda x: x[1], reverse=True)

    return candidates[:MAX_RESULTS]
