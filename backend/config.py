import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///humanbench.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Single key under which all best scores are stored
    SCORES_STORAGE_KEY = os.environ.get('SCORES_STORAGE_KEY', 'human-benchmark-scores')
    # Reaction stimulus delay bounds (ms)
    REACTION_MIN_DELAY_MS = int(os.environ.get('REACTION_MIN_DELAY_MS', '2000'))
    REACTION_MAX_DELAY_MS = int(os.environ.get('REACTION_MAX_DELAY_MS', '5000'))
    # Chimp sequence reveal and pause between rounds (ms)
    CHIMP_REVEAL_MS = int(os.environ.get('CHIMP_REVEAL_MS', '1000'))
    CHIMP_NEXT_ROUND_MS = int(os.environ.get('CHIMP_NEXT_ROUND_MS', '600'))
    # Comma separated list of frontend origins
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173',
        ).split(',') if o.strip()
    ]
