"""
Text Reporter

Renders exposure results and shot logs as plain text for the terminal, and
exports a user's shot log to a text file.
"""

import os
import logging
from typing import Optional, List, Iterable
from datetime import datetime

import sys
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from models import ExposureSettings, ExposureCalculationResult, FilmStock, ShotLog

logger = logging.getLogger(__name__)


def format_shutter_speed(speed: float) -> str:
    """
    Format a shutter-speed denominator for display.

    Example:
        >>> format_shutter_speed(200)
        '1/200s'
        >>> format_shutter_speed(0.5)
        '2s'
    """
    if speed > 1:
        return f"1/{speed:g}s"
    return f"{1 / speed:g}s"


def format_aperture(aperture: float) -> str:
    return f"f/{aperture:g}"


def format_delta(delta: Optional[float]) -> str:
    """Signed stops, e.g. '+0.64 EV'; 'n/a' when the delta is unknown."""
    if delta is None:
        return "n/a"
    return f"{delta:+.2f} EV"


def format_settings(settings: ExposureSettings) -> str:
    """One-line summary, e.g. 'f/16 • 1/200s • ISO 200 (+1.64 EV)'."""
    text = f"{format_aperture(settings.aperture)} • {format_shutter_speed(settings.shutter_speed)} • ISO {settings.iso}"
    if settings.exposure_delta is not None:
        text += f" ({format_delta(settings.exposure_delta)})"
    return text


def format_rating(rating: Optional[int]) -> str:
    if not rating:
        return "unrated"
    return "★" * rating + "☆" * (5 - rating) + f" ({rating}/5)"


class TextReporter:
    """
    Generates text renderings of results and shot logs.

    Attributes:
        output_directory: Base directory for exported reports

    Example:
        >>> reporter = TextReporter('shot_log_reports/')
        >>> print(reporter.format_result(result, film_stock))
        >>> path = reporter.generate_report('ansel', shot_logs)
    """

    def __init__(self, output_directory: str = 'shot_log_reports'):
        """
        Initialize text reporter.

        Args:
            output_directory: Base directory for saving reports
        """
        self.output_directory = output_directory

    @classmethod
    def from_config(cls, config_path: str = 'config.yaml') -> 'TextReporter':
        """Create TextReporter from configuration file."""
        import yaml

        with open(config_path, 'r') as f:
            config = yaml.safe_load(f) or {}

        output_dir = config.get('reporting', {}).get('text_reports_path', 'shot_log_reports')
        return cls(output_directory=os.path.expanduser(output_dir))

    def format_result(self, result: ExposureCalculationResult,
                      film_stock: Optional[FilmStock] = None) -> str:
        """
        Format a calculation result.

        Args:
            result: Calculator output
            film_stock: When given, each setting is marked with whether it
                lies inside the film's latitude

        Returns:
            Multi-line text
        """
        def line(settings: ExposureSettings) -> str:
            text = format_settings(settings)
            if film_stock is not None and settings.exposure_delta is not None:
                if film_stock.is_within_latitude(settings.exposure_delta):
                    text += "  within latitude"
                else:
                    text += "  outside latitude"
            return text

        lines = ["RECOMMENDED", "-" * 60, f"  {line(result.recommended_settings)}"]

        if result.alternative_settings:
            lines.append("\nALTERNATIVES")
            lines.append("-" * 60)
            for i, settings in enumerate(result.alternative_settings, 1):
                lines.append(f"  [{i}] {line(settings)}")

        return "\n".join(lines)

    def format_shot_log(self, shot_log: ShotLog) -> str:
        """
        Format a single shot log with full detail.

        Args:
            shot_log: Log to render

        Returns:
            Multi-line text
        """
        lines = [
            f"Shot {shot_log.id}",
            "=" * 80,
            f"Date: {self._format_timestamp(shot_log.timestamp)}",
            f"Camera: {shot_log.camera.name}",
            f"Lens: {shot_log.lens.name}",
            f"Film: {shot_log.film_stock.name} (ISO {shot_log.film_stock.iso}, {shot_log.film_stock.film_type.value})",
            f"Lighting: {shot_log.lighting_condition.name} (EV {shot_log.lighting_condition.ev_value:g})",
            "",
            f"Selected:    {format_settings(shot_log.selected_settings)}",
        ]

        if shot_log.was_edited:
            lines.append(f"Originally:  {format_settings(shot_log.original_settings)}")

        lines.append(f"Recommended: {format_settings(shot_log.recommended_settings)}")
        for settings in shot_log.alternative_settings:
            lines.append(f"Alternative: {format_settings(settings)}")

        lines.append(f"\nRating: {format_rating(shot_log.rating)}")
        if shot_log.notes:
            lines.append(f"Notes: {shot_log.notes}")

        return "\n".join(lines)

    def format_shot_log_list(self, shot_logs: Iterable[ShotLog]) -> str:
        """Format shot logs as a one-line-per-log table."""
        shot_logs = list(shot_logs)
        lines = [f"Shot logs ({len(shot_logs)}):", "-" * 80]

        for log in shot_logs:
            lines.append(
                f"  {log.id[:8] if log.id else '--------'}  "
                f"{self._format_timestamp(log.timestamp):20} "
                f"{format_aperture(log.selected_settings.aperture):6} "
                f"{format_shutter_speed(log.selected_settings.shutter_speed):8} "
                f"{log.film_stock.name:20} {format_rating(log.rating)}"
            )

        return "\n".join(lines)

    def generate_report(self, username: str, shot_logs: List[ShotLog],
                        filename: Optional[str] = None) -> str:
        """
        Write a user's shot logs to a text report.

        Args:
            username: Owner of the logs
            shot_logs: Logs to include, in the order given
            filename: Optional custom filename (defaults to shot_log_<username>.txt)

        Returns:
            Path to generated report file
        """
        lines = [
            f"Shot Log: {username}",
            "=" * 80,
            f"Generated: {self._format_timestamp(datetime.now())}",
            f"Total shots: {len(shot_logs)}",
        ]

        rated = [log.rating for log in shot_logs if log.rating]
        if rated:
            lines.append(f"Average rating: {sum(rated) / len(rated):.1f} ({len(rated)} rated)")

        for log in shot_logs:
            lines.append("")
            lines.append(self.format_shot_log(log))

        os.makedirs(self.output_directory, exist_ok=True)

        if not filename:
            safe_name = username.replace(' ', '_').replace('/', '_')
            filename = f"shot_log_{safe_name}.txt"

        output_path = os.path.join(self.output_directory, filename)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write("\n".join(lines) + "\n")

        logger.info(f"Generated text report: {output_path}")
        return output_path

    @staticmethod
    def _format_timestamp(timestamp: Optional[datetime]) -> str:
        if timestamp is None:
            return "unknown"
        return timestamp.strftime('%Y-%m-%d %H:%M')
