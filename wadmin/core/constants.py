"""Static constants and user-facing messages for the workout admin console."""

from __future__ import annotations

DEFAULT_BASE_URL = "http://localhost:5000"

LOGIN_PATH = "/api/auth/login"
WORKOUTS_PATH = "/api/admin/workouts"

TOKEN_KEY = "token"

PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/100"

EDITABLE_FIELDS = ("workout_type", "duration", "calories_burned", "image_url")

RETRYABLE_STATUS_CODES = (429, 502, 503, 504)

MSG_LOGIN_FALLBACK = "Something went wrong. Please try again."
MSG_UNREACHABLE = "Unable to connect to server. Please try again later."
MSG_MISSING_TOKEN = "Authentication token is missing. Please log in."
MSG_FETCH_FAILED = "Failed to fetch workouts. Please try again."
MSG_UPDATE_FAILED = "Failed to update workout. Please try again."
MSG_DELETE_FAILED = "Failed to delete workout. Please try again."
MSG_CONFIRM_DELETE = "Are you sure you want to delete this workout?"

MSG_WORKOUT_TYPE = "Workout type must be at least 3 characters"
MSG_DURATION = "Duration must be a positive number"
MSG_CALORIES = "Calories burned must be a positive number"

MIN_WORKOUT_TYPE_LENGTH = 3
