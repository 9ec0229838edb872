"""Tests for habit and profile form validation."""

from __future__ import annotations

import pytest

from habita.errors import ValidationError
from habita.models import Habit, HabitType, User
from habita.models.habit import DEFAULT_EMOJI
from habita.services.forms import HabitForm, ProfileForm


class TestHabitForm:
    def test_defaults_select_every_day(self):
        form = HabitForm(name="Run")

        assert form.selected_days == [1, 2, 3, 4, 5, 6, 7]
        assert form.habit_type is HabitType.QUANTITATIVE
        assert form.emoji == DEFAULT_EMOJI

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"name": "   "}, "Please enter habit name"),
            ({"name": "Run", "selected_days": []}, "Please select at least one day"),
            ({"name": "Run", "selected_days": [0, 3]}, "Please select valid days"),
            (
                {"name": "Water", "habit_type": HabitType.QUALITATIVE, "target_value": "abc"},
                "Please enter a valid target value (greater than 0)",
            ),
            (
                {"name": "Water", "habit_type": HabitType.QUALITATIVE, "target_value": "0"},
                "Please enter a valid target value (greater than 0)",
            ),
            (
                {"name": "Mood", "habit_type": HabitType.SCALABLE, "scale_range": "-2"},
                "Please enter a valid scale range (greater than 0)",
            ),
        ],
    )
    def test_validation_messages(self, kwargs, message):
        with pytest.raises(ValidationError) as exc_info:
            HabitForm(**kwargs).validate()

        assert exc_info.value.message == message

    def test_target_only_checked_for_qualitative(self):
        HabitForm(name="Run", target_value="nonsense").validate()

    def test_apply_qualitative(self):
        form = HabitForm(
            name="  Water ",
            emoji="💧",
            habit_type=HabitType.QUALITATIVE,
            target_value=" 8 ",
            selected_days=[1, 7],
        )

        habit = form.apply_to(Habit(name=""))

        assert habit.name == "Water"
        assert habit.emoji == "💧"
        assert habit.type == "qualitative"
        assert habit.target_value == 8
        assert habit.scale_range is None
        assert habit.frequency == "1,2"

    def test_apply_scalable_clears_target(self):
        habit = Habit(name="Mood", target_value=5)
        form = HabitForm(name="Mood", habit_type=HabitType.SCALABLE, scale_range="5")

        form.apply_to(habit)

        assert habit.target_value == 0
        assert habit.scale_range == "5"
        assert habit.scale_max == 5

    def test_apply_does_not_touch_habit_when_invalid(self):
        habit = Habit(name="Keep", frequency="2")

        with pytest.raises(ValidationError):
            HabitForm(name="", selected_days=[3]).apply_to(habit)

        assert habit.name == "Keep"
        assert habit.frequency == "2"

    def test_from_habit_translates_days_back(self):
        habit = Habit(name="Gym", type="qualitative", frequency="1,2,4", target_value=3)

        form = HabitForm.from_habit(habit)

        assert form.selected_days == [1, 3, 7]
        assert form.habit_type is HabitType.QUALITATIVE
        assert form.target_value == "3"

    def test_unknown_stored_type_must_be_chosen_again(self):
        habit = Habit(name="Legacy", type="Mystery", frequency="2")

        form = HabitForm.from_habit(habit)

        assert form.habit_type is None
        with pytest.raises(ValidationError, match="Please select a habit type"):
            form.apply_to(habit)
        assert habit.type == "Mystery"

        form.habit_type = HabitType.SCALABLE
        form.apply_to(habit)
        assert habit.type == "scalable"

    def test_load_edit_save_keeps_frequency(self):
        habit = Habit(name="Gym", type="quantitative", frequency="1,4,7")

        HabitForm.from_habit(habit).apply_to(habit)

        assert habit.frequency == "1,4,7"


class TestProfileForm:
    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"surname": "Doe", "age": "30"}, "Please enter your name"),
            ({"name": "Jane", "age": "30"}, "Please enter your surname"),
            ({"name": "Jane", "surname": "Doe", "age": "thirty"}, "Please enter a valid age"),
            ({"name": "Jane", "surname": "Doe", "age": "0"}, "Please enter a valid age"),
        ],
    )
    def test_validation_messages(self, kwargs, message):
        with pytest.raises(ValidationError, match=message):
            ProfileForm(**kwargs).validate()

    def test_apply_to_user(self):
        user = ProfileForm(name=" Jane ", surname="Doe", age="31", gender="F").apply_to(
            User(name="", surname="", age=0)
        )

        assert (user.name, user.surname, user.age, user.gender) == ("Jane", "Doe", 31, "F")

    def test_from_user(self):
        form = ProfileForm.from_user(User(name="Jane", surname="Doe", age=31, gender=""))

        assert form.age == "31"
