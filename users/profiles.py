from .models import UserProfile


def unknown_user(user_id):
    return {'id': user_id, 'full_name': 'Unknown User', 'avatar_url': None, 'user_type': None}


def display_for(user_id):
    """Display data for one user; unknown ids get a placeholder."""
    if not user_id:
        return None
    profile = UserProfile.objects.filter(user_id=user_id).first()
    return profile.as_display() if profile else unknown_user(user_id)


def display_map(user_ids):
    """Display data for several users in one query, keyed by user id."""
    ids = {uid for uid in user_ids if uid}
    found = {p.user_id: p.as_display() for p in UserProfile.objects.filter(user_id__in=ids)}
    return {uid: found.get(uid) or unknown_user(uid) for uid in ids}
