# wsgi.py
import logging
from filevault import create_app
from filevault.config_security import SecurityConfig

logging.basicConfig(
    level=SecurityConfig.get_log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# For gunicorn deployment: gunicorn -c gunicorn.conf.py wsgi:application
application = app = create_app()

if __name__ == '__main__':
    app.run(debug=False, host='0.0.0.0', port=8000)
