from src.attendance_portal.attendance_portal.main import create_app

app = create_app()

if __name__ == "__main__":
    app.run()
