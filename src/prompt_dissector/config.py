"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    # Classifier scores (see dissection.classifier.ClassifierScores)
    classifier_marker_score: int = 90
    classifier_phrase_score: int = 70
    classifier_keyword_base_score: int = 50
    classifier_keyword_step_score: int = 10
    classifier_keyword_score_cap: int = 65
    classifier_min_score: int = 30  # Below this for every category → fallback
    classifier_fallback_type: str = "Task"
    classifier_fallback_confidence: int = 20

    # Segmenter thresholds
    max_segment_length: int = 500  # Longer single segments get re-split
    min_line_length: int = 20  # Shorter lines are noise in line-by-line splitting

    # Session editing
    history_max_depth: int = 0  # 0 = unlimited snapshots per session

    # File import limits
    max_file_size_mb: int = 5
    supported_extensions: str = ".txt,.md"  # Comma-separated

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# Global settings instance
settings = Settings()
