from src.web.app import run_web

# python -m src.web
if __name__ == "__main__":
    run_web()
