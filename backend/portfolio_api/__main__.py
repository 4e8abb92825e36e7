"""Run the Portfolio API server: python -m portfolio_api"""

from portfolio_api.main import run

if __name__ == "__main__":
    run()
