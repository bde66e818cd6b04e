from svc_files.api.fastapi import create_app
from svc_files.app import setup_logging

setup_logging()

app = create_app()
