"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import SurveyCategory

DEFAULT_LEAVE_BALANCE = 12
DEFAULT_HISTORY_LIMIT = 30
DEFAULT_LIST_LIMIT = 500
MIN_PASSWORD_LENGTH = 6

# Leave deduction divides gross pay by a flat 30 days, whatever the month length.
LEAVE_DEDUCTION_DIVISOR = 30

DEFAULT_SURVEY_RATES = {
    SurveyCategory.YOURS: 27,
    SurveyCategory.YOURS_INTERNATIONAL: 25,
    SurveyCategory.SSI: 25,
    SurveyCategory.DYNATA: 20,
}
