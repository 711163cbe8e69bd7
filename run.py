"""
开发服务器入口: python run.py
"""
import os

from pintracker import create_app

app = create_app()

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 5000)))
