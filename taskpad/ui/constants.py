"""UI constants for TaskPad."""

# Notification settings
MAX_TEXT_LENGTH_IN_NOTIFICATION = 30
NOTIFICATION_TIMEOUT_SHORT = 2
NOTIFICATION_TIMEOUT_LONG = 5

# Fired task reminders stay up longer than action feedback
REMINDER_TIMEOUT = 8

# Screen text
APP_TITLE = "My Tasks"
ACTIVE_TITLE = "Active Tasks"
COMPLETED_TITLE = "Completed Tasks"
EMPTY_LIST_MESSAGE = "No tasks"
EMPTY_TASK_ALERT_TITLE = "Error"
