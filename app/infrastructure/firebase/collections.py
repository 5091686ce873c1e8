"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. Collections are created automatically
when the first document is written. Use these constants so collection names
stay consistent.

Document shapes:
    users/{user_id}: name, email, hashed_password, role, is_active,
        profile_image_url, created_at, updated_at
    user_emails/{normalized_email}: user_id, created_at
        (create-if-absent enforces email uniqueness)
    tasks/{task_id}: title, description, priority, status, due_date,
        assigned_to[], attachments[], todo_checklist[{text, completed}],
        progress, created_by, created_at, updated_at
"""

COLLECTION_USERS = "users"
COLLECTION_USER_EMAILS = "user_emails"
COLLECTION_TASKS = "tasks"
