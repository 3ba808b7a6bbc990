"""
Quick run script for the Green Loan Scoring API
"""
import uvicorn

from greenscore.logging_config import configure_logging

if __name__ == "__main__":
    configure_logging()

    print("="*60)
    print("GREEN LOAN SCORING API")
    print("   TerraLend - Green Lending")
    print("="*60)
    print("\nServer running at: http://localhost:8000")
    print("API Docs: http://localhost:8000/docs")
    print("Health Check: http://localhost:8000/health")
    print("\nPress Ctrl+C to stop\n")

    uvicorn.run(
        "webapp.api:app",
        host="127.0.0.1",
        port=8000,
        reload=True
    )
