import enum


class MuscleGroup(str, enum.Enum):
    ABS = "Abs"
    BACK = "Back"
    BICEPS = "Biceps"
    CALVES = "Calves"
    CHEST = "Chest"
    FOREARMS = "Forearms"
    GLUTES = "Glutes"
    HAMSTRINGS = "Hamstrings"
    NECK = "Neck"
    QUADS = "Quads"
    SHOULDERS = "Shoulders"
    TRICEPS = "Triceps"
    UPPER_TRAPS = "Upper traps"

    @property
    def label(self) -> str:
        """Подпись для интерфейса: "Upper traps" -> "Upper Traps"."""
        return " ".join(word.capitalize() for word in self.value.split())

    @property
    def slug(self) -> str:
        return self.value.lower().replace(" ", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "MuscleGroup":
        for group in cls:
            if group.slug == slug.lower():
                return group
        raise ValueError(f"Unknown muscle group: {slug}")


class FitnessLevel(str, enum.Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class FitnessGoal(str, enum.Enum):
    build_muscle = "build_muscle"
    lose_weight = "lose_weight"
    maintain = "maintain"
    improve_strength = "improve_strength"
    improve_endurance = "improve_endurance"


class DayOfWeek(str, enum.Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"

    @property
    def offset(self) -> int:
        """Смещение от понедельника, совпадает с date.weekday()."""
        return list(DayOfWeek).index(self)
