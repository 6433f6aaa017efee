# This file stores copy blocks for headings, hints, and empty-state messages.
# It exists so wording stays consistent across the login, today, and settings pages.

from __future__ import annotations

APP_TITLE = "Same-Day Room Rate Assistant"
APP_SUBTITLE = "Minimum acceptable room rate from the monthly target, day-use forecast, and today's actuals."

TARGET_NOT_SET = "Set a monthly target on the Settings page to see today's target."
NO_HISTORY = "Upload day-use CSV history on the Settings page to see a forecast."
HOLIDAYS_LOADING = "Loading public holidays; the forecast will refresh once they arrive."
TARGET_MET = "Day-use revenue already covers today's target."
FIRST_RUN = "No password is set yet. Choose a shared password for this terminal."
CLEAR_DATA_CONFIRM = "Delete all day-use history for this hotel? This cannot be undone."
UPLOAD_HINT = "Required columns: id, date, price. Rows with an existing id overwrite it; new ids are added."
