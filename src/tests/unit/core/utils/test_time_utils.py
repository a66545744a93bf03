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

from datetime import date, time

import pytest

from gitdrop.core.exceptions import ValidationError
from gitdrop.core.utils.time_utils import (
    apply_hhmm,
    format_date,
    parse_date,
    parse_hhmm,
)


@pytest.mark.parametrize(
    "value,expected",
    [("09:00", time(9, 0)), ("9:05", time(9, 5)), (" 23:59 ", time(23, 59)), ("00:00", time(0, 0))],
)
def test_parse_hhmm(value, expected):
    assert parse_hhmm(value) == expected


@pytest.mark.parametrize("value", ["24:00", "12:60", "noon", "12", "12:5", "-1:00", ""])
def test_parse_hhmm_rejects(value):
    with pytest.raises(ValidationError):
        parse_hhmm(value)


def test_apply_hhmm_is_timezone_aware():
    moment = apply_hhmm(date(2025, 3, 14), "14:30")

    assert moment.tzinfo is not None
    assert (moment.year, moment.month, moment.day) == (2025, 3, 14)
    assert (moment.hour, moment.minute, moment.second) == (14, 30, 0)


def test_parse_date():
    assert parse_date("2025-03-14") == date(2025, 3, 14)

    with pytest.raises(ValidationError):
        parse_date("14/03/2025")


def test_format_date():
    assert format_date(date(2025, 3, 14)) == "Fri, Mar 14, 2025"
