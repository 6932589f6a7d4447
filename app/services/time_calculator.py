"""
Service de calcul des horaires / Wall-clock time calculation service.
Convertit les horaires HH:MM et calcule les intervalles des jobs.
"""

from app.config import settings


class TimeCalculatorService:
    """Calcul des créneaux de jobs / Job slot calculation."""

    @staticmethod
    def time_to_minutes(time_str: str) -> int:
        """Horaire HH:MM (ou HH:MM:SS) en minutes depuis minuit / HH:MM time to minutes since midnight."""
        parts = time_str.split(":")
        hours = int(parts[0])
        mins = int(parts[1]) if len(parts) > 1 and parts[1] else 0
        return hours * 60 + mins

    @staticmethod
    def minutes_to_time(total_minutes: int) -> str:
        """Minutes depuis minuit en HH:MM, modulo minuit / Minutes since midnight to HH:MM."""
        new_hours = (total_minutes // 60) % 24
        new_mins = total_minutes % 60
        return f"{new_hours:02d}:{new_mins:02d}"

    @staticmethod
    def add_minutes_to_time(time_str: str, minutes: int) -> str:
        """
        Ajouter des minutes à un horaire HH:MM / Add minutes to a HH:MM time string.
        Retourne le nouvel horaire au format HH:MM.
        """
        return TimeCalculatorService.minutes_to_time(
            TimeCalculatorService.time_to_minutes(time_str) + minutes
        )

    @staticmethod
    def job_interval(start_time: str | None, duration_minutes: int | None) -> tuple[int, int]:
        """
        Intervalle semi-ouvert [début, fin) d'un job en minutes / Half-open [start, end) job interval.
        Les valeurs manquantes prennent les défauts de configuration.
        Missing values fall back to the configured defaults.
        """
        start = TimeCalculatorService.time_to_minutes(
            (start_time or settings.DEFAULT_JOB_START_TIME)[:5]
        )
        duration = duration_minutes or settings.DEFAULT_JOB_DURATION_MINUTES
        return start, start + duration

    @staticmethod
    def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
        # Bornes semi-ouvertes : fin == début ne chevauche pas / half-open: end == start is no overlap
        return start_a < end_b and start_b < end_a
