# app.py
# WSGI entry point for markwiki
#
#   flask --app app run
#   gunicorn --chdir src app:app

import sys

from main_app import create_app

app = create_app()


if __name__ == "__main__":
    debug = app.config["DEBUG"] or "debug" in sys.argv
    app.run(debug=debug, host="0.0.0.0", port=8080)
