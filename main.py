from notification_center.main import create_app

app = create_app()
