#!/usr/bin/env python3
"""
Capital Quiz - Main Entry Point

This script runs the capital quiz in the terminal. Settings are read from
an optional config.json in the working directory; without it the defaults
apply (10 seconds per question, images from ./images/).

Usage:
    python main.py

Configuration (config.json):
    {
        "logging": {"level": "WARNING", "log_directory": "./logs/"},
        "quiz": {"countdown_seconds": 10, "image_directory": "./images/"}
    }
"""

import asyncio
import json
import logging
import sys
from pathlib import Path


def load_config():
    """Load configuration from config.json, or return an empty config if absent."""
    config_path = Path("config.json")

    if not config_path.exists():
        return {}

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        print(f"❌ Erreur : JSON invalide dans config.json : {e}")
        sys.exit(1)
    except OSError as e:
        print(f"❌ Erreur au chargement de config.json : {e}")
        sys.exit(1)

    if not isinstance(config, dict):
        print("❌ Erreur : config.json doit contenir un objet JSON")
        sys.exit(1)
    return config


def setup_logging_from_config(config):
    """Set up logging based on configuration."""
    log_config = config.get('logging', {})
    log_level = getattr(logging, log_config.get('level', 'WARNING').upper(), logging.WARNING)
    log_directory = Path(log_config.get('log_directory', './logs/'))

    # Create logs directory
    log_directory.mkdir(parents=True, exist_ok=True)

    # The console is shared with the game, so it only shows problems
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            console_handler,
            logging.FileHandler(log_directory / "quiz.log", encoding='utf-8')
        ]
    )


async def run_quiz_with_config():
    """Run the quiz with configuration."""
    config = load_config()

    setup_logging_from_config(config)

    from capital_quiz.app import run_app
    await run_app(config)


if __name__ == "__main__":
    try:
        asyncio.run(run_quiz_with_config())
    except KeyboardInterrupt:
        print("\n👋 Au revoir !")
