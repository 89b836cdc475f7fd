"""Constants shared across the step SDK.

Several values can be overridden via environment variables so that
deployments can tune the flow without code changes.
"""

import os

# Well-known key under which in-progress state is kept in the progress store.
STORAGE_KEY = "video-form-progress"

# Seconds the continue action stays locked after entering a step.
# Overridable via GATE_DELAY_SECONDS env var.
GATE_DELAY_SECONDS = float(os.getenv("GATE_DELAY_SECONDS", "1.0"))

# Storage endpoint the submission client posts to.
SUBMIT_ENDPOINT = os.getenv(
    "SUBMIT_ENDPOINT", "http://localhost:8080/api/v1/submissions"
)
SUBMIT_TIMEOUT_SECONDS = float(os.getenv("SUBMIT_TIMEOUT_SECONDS", "10"))

# Fallback booking link shown on the completion step when the descriptor
# does not carry its own.
BOOKING_URL = os.getenv("BOOKING_URL") or None

# Fields stamped on every stored submission; everything else is an answer.
TECHNICAL_FIELDS: tuple[str, ...] = (
    "id",
    "sessionId",
    "submittedAt",
    "remoteAddress",
    "userAgentString",
)

# User-facing notices (the form is French-language).
SUBMISSION_FAILED_NOTICE = "Erreur lors de la soumission. Veuillez réessayer."
REQUIRED_FIELD_MESSAGE = "Ce champ est requis"
INVALID_EMAIL_MESSAGE = "Email invalide"
INVALID_PHONE_MESSAGE = "Numéro de téléphone invalide"
EMPTY_TEXT_MESSAGE = "Veuillez saisir une réponse"
UNKNOWN_OPTION_MESSAGE = "Option inconnue"
