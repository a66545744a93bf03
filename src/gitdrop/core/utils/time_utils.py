# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

import re
from datetime import date, datetime, time

from gitdrop.core.exceptions import ValidationError

_HHMM = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_hhmm(value: str) -> time:
    match = _HHMM.match(value.strip())
    if not match:
        raise ValidationError(f'Invalid time format "{value}", expected HH:MM')
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise ValidationError(f'Invalid time "{value}", expected HH:MM')
    return time(hours, minutes)


def apply_hhmm(day: date, value: str) -> datetime:
    """Combine a calendar day with an HH:MM string into an aware local datetime."""
    return datetime.combine(day, parse_hhmm(value)).astimezone()


def parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(
            f'Invalid date "{value}", expected YYYY-MM-DD'
        ) from e


def format_time(moment: datetime) -> str:
    return moment.astimezone().strftime("%I:%M:%S %p")


def format_date(day: date | datetime) -> str:
    return day.strftime("%a, %b %d, %Y")
