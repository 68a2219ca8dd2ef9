#!/usr/bin/env python3

import os

from jsonhttp import create_app
from jsonhttp.utils.config import load_config

config = load_config()

# Create the Flask application
app = create_app(config)

if __name__ == '__main__':
    server = config['server']
    port = int(os.environ.get('PORT', server['port']))
    app.run(debug=server['debug'], host=server['host'], port=port)
