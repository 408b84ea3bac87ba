import os


def _env_flag(name, default):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Phrase the game starts with; the host can change it while waiting
    DEFAULT_PHRASE = os.environ.get('DEFAULT_PHRASE', 'MARK SHIBLEY')
    SKIP_TURN_AFTER_GUESS = _env_flag('SKIP_TURN_AFTER_GUESS', 'true')
    # Buzzers stay paused this long after a letter is guessed (ms)
    BUZZER_REENABLE_DELAY_MS = int(os.environ.get('BUZZER_REENABLE_DELAY_MS', '5000'))
    # Server-side timer that lifts the pause once the deadline passes
    AUTO_REENABLE_BUZZERS = _env_flag('AUTO_REENABLE_BUZZERS', 'true')
    # Socket.IO room every screen subscribes to
    BROADCAST_CHANNEL = os.environ.get('BROADCAST_CHANNEL', 'game-channel')
    # Optional: write winner photos here instead of keeping the data URI in memory
    WINNER_PHOTO_DIR = os.environ.get('WINNER_PHOTO_DIR')
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
        ).split(',')
        if origin.strip()
    ]
