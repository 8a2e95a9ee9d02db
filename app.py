import os

from mrogantt import create_app
from mrogantt.config import BaseConfig, DevelopmentConfig

app = create_app(DevelopmentConfig if os.environ.get("FLASK_DEBUG") == "1" else BaseConfig)


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=int(os.environ.get("PORT", 5000)))
