#!/usr/bin/env python3
"""
Simple integration check: configuration, question bank and one play-through.
"""
from capital_quiz.config_manager import ConfigManager
from capital_quiz.models import Difficulty, QuizSettings
from capital_quiz.question_bank import questions_for
from capital_quiz.quiz_session import QuizSession


def main():
    print("Testing Capital Quiz integration...")

    config = ConfigManager()
    settings = config.get_quiz_settings()
    assert isinstance(settings, QuizSettings)
    assert settings.countdown_seconds == 10
    print("✓ Default settings are correct")

    assert config.set_countdown_seconds(30)['success'] is True
    assert config.set_countdown_seconds(0)['success'] is False
    assert "30 seconds" in config.get_settings_summary()
    print("✓ Configuration settings work correctly")

    for difficulty in Difficulty:
        assert len(questions_for(difficulty)) == 5
    print("✓ Every difficulty has five questions")

    session = QuizSession(Difficulty.MEDIUM)
    session.resolve_answer("brasília")
    session.advance()
    session.resolve_timeout()
    session.advance()
    assert session.resolve_answer("Canberra").is_correct
    assert session.resolve_answer("Canberra") is None
    while session.advance():
        session.resolve_answer("?")

    summary = session.summary()
    assert summary.score == 2
    assert [m.country for m in summary.mistakes] == ["Canada", "Inde", "Japon"]
    print(f"✓ Play-through scored {summary.score}/{summary.total}")

    print("\n🎉 All integration checks passed!")


if __name__ == "__main__":
    main()
