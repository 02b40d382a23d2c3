"""
Configuration manager for Capital Quiz settings.
"""
import logging
from pathlib import Path
from typing import Any, Dict, List

from .models import QuizSettings


class ConfigManager:
    """Manages quiz settings and their validation."""

    # Default configuration values
    DEFAULT_COUNTDOWN_SECONDS = 10
    DEFAULT_TICK_INTERVAL = 1.0
    DEFAULT_IMAGE_DIRECTORY = "./images/"

    # Validation limits
    MIN_COUNTDOWN_SECONDS = 1
    MAX_COUNTDOWN_SECONDS = 300  # 5 minutes
    MAX_TICK_INTERVAL = 5.0

    def __init__(self):
        """Initialize ConfigManager with default settings."""
        self.logger = logging.getLogger(__name__)
        self._settings = QuizSettings(
            countdown_seconds=self.DEFAULT_COUNTDOWN_SECONDS,
            tick_interval=self.DEFAULT_TICK_INTERVAL,
            image_directory=self.DEFAULT_IMAGE_DIRECTORY
        )

    def get_quiz_settings(self) -> QuizSettings:
        """
        Get current quiz settings.

        Returns:
            Copy of the current QuizSettings
        """
        return QuizSettings(
            countdown_seconds=self._settings.countdown_seconds,
            tick_interval=self._settings.tick_interval,
            image_directory=self._settings.image_directory
        )

    def set_countdown_seconds(self, seconds: int) -> Dict[str, Any]:
        """
        Set the time allowed for each question.

        Args:
            seconds: Countdown length in seconds

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(seconds, int) or isinstance(seconds, bool):
            error_msg = f"Countdown must be an integer, got {type(seconds).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid input: Expected a number, got {type(seconds).__name__}"
            }

        if seconds < self.MIN_COUNTDOWN_SECONDS:
            error_msg = f"Countdown must be at least {self.MIN_COUNTDOWN_SECONDS} second"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Countdown too short: Minimum is {self.MIN_COUNTDOWN_SECONDS} second"
            }

        if seconds > self.MAX_COUNTDOWN_SECONDS:
            error_msg = f"Countdown cannot exceed {self.MAX_COUNTDOWN_SECONDS} seconds"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Countdown too long: Maximum is {self.MAX_COUNTDOWN_SECONDS} seconds ({self.MAX_COUNTDOWN_SECONDS // 60} minutes)"
            }

        self._settings.countdown_seconds = seconds
        self.logger.info(f"Countdown set to {seconds} seconds")
        return {
            'success': True,
            'message': f"Countdown set to {seconds} seconds",
            'user_message': f"✅ Countdown set to {seconds} seconds"
        }

    def get_countdown_seconds(self) -> int:
        return self._settings.countdown_seconds

    def set_tick_interval(self, interval: float) -> Dict[str, Any]:
        """
        Set how much wall time one countdown step takes.

        Args:
            interval: Seconds per countdown step

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(interval, (int, float)) or isinstance(interval, bool):
            error_msg = f"Tick interval must be a number, got {type(interval).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid input: Expected a number, got {type(interval).__name__}"
            }

        if interval <= 0 or interval > self.MAX_TICK_INTERVAL:
            error_msg = f"Tick interval must be greater than 0 and at most {self.MAX_TICK_INTERVAL} seconds"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Tick interval out of range: use a value up to {self.MAX_TICK_INTERVAL} seconds"
            }

        self._settings.tick_interval = float(interval)
        self.logger.info(f"Tick interval set to {interval} seconds")
        return {
            'success': True,
            'message': f"Tick interval set to {interval} seconds",
            'user_message': f"✅ Tick interval set to {interval} seconds"
        }

    def get_tick_interval(self) -> float:
        return self._settings.tick_interval

    def set_image_directory(self, directory: str) -> Dict[str, Any]:
        """
        Set the directory searched for country images.

        Args:
            directory: Path to the image directory

        Returns:
            Dictionary with success status, error message, and user-friendly message
        """
        if not isinstance(directory, str):
            error_msg = f"Image directory must be a string, got {type(directory).__name__}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid input: Expected a path string, got {type(directory).__name__}"
            }

        if not directory.strip():
            error_msg = "Image directory cannot be empty"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': "❌ Directory path cannot be empty"
            }

        try:
            normalized_path = str(Path(directory).resolve())
        except (OSError, ValueError) as e:
            error_msg = f"Invalid directory path format: {e}"
            self.logger.error(error_msg)
            return {
                'success': False,
                'error': error_msg,
                'user_message': f"❌ Invalid path format: {directory}"
            }

        self._settings.image_directory = normalized_path
        self.logger.info(f"Image directory set to {normalized_path}")
        return {
            'success': True,
            'message': f"Image directory set to {normalized_path}",
            'user_message': f"✅ Image directory set to {normalized_path}"
        }

    def get_image_directory(self) -> str:
        return self._settings.image_directory

    def load_from_dict(self, quiz_config: Dict[str, Any]) -> List[str]:
        """
        Apply the "quiz" section of a configuration file.

        Unknown keys are ignored; invalid values keep the current setting.

        Args:
            quiz_config: Mapping with optional countdown_seconds,
                tick_interval and image_directory keys

        Returns:
            List of error messages for values that were rejected
        """
        setters = {
            'countdown_seconds': self.set_countdown_seconds,
            'tick_interval': self.set_tick_interval,
            'image_directory': self.set_image_directory,
        }
        errors = []
        for key, setter in setters.items():
            if key not in quiz_config:
                continue
            result = setter(quiz_config[key])
            if not result['success']:
                errors.append(f"{key}: {result['error']}")
        if errors:
            self.logger.warning(f"Ignored {len(errors)} invalid configuration value(s)")
        return errors

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values."""
        self._settings = QuizSettings(
            countdown_seconds=self.DEFAULT_COUNTDOWN_SECONDS,
            tick_interval=self.DEFAULT_TICK_INTERVAL,
            image_directory=self.DEFAULT_IMAGE_DIRECTORY
        )
        self.logger.info("All settings reset to default values")

    def validate_settings(self) -> Dict[str, Any]:
        """
        Validate current settings and return validation results.

        Returns:
            Dictionary with validation results and any issues found
        """
        validation_result = {
            "valid": True,
            "issues": []
        }

        countdown = self._settings.countdown_seconds
        if (not isinstance(countdown, int) or
                countdown < self.MIN_COUNTDOWN_SECONDS or
                countdown > self.MAX_COUNTDOWN_SECONDS):
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid countdown: {countdown}")

        interval = self._settings.tick_interval
        if not isinstance(interval, (int, float)) or interval <= 0 or interval > self.MAX_TICK_INTERVAL:
            validation_result["valid"] = False
            validation_result["issues"].append(f"Invalid tick interval: {interval}")

        if not isinstance(self._settings.image_directory, str) or not self._settings.image_directory.strip():
            validation_result["valid"] = False
            validation_result["issues"].append(
                f"Invalid image directory: {self._settings.image_directory}"
            )

        return validation_result

    def get_settings_summary(self) -> str:
        """
        Get a formatted summary of current settings.

        Returns:
            Human-readable string describing current settings
        """
        return (
            f"Quiz Settings:\n"
            f"• Countdown: {self._settings.countdown_seconds} seconds\n"
            f"• Tick interval: {self._settings.tick_interval} seconds\n"
            f"• Image Directory: {self._settings.image_directory}"
        )
