"""
Local development launcher for the invoice dashboard backend.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Invoice Dashboard Backend")
    print("=" * 60)
    print()
    print("📌 Endpoints:")
    print("   - Health Check:    GET  http://localhost:8000/health")
    print("   - Sign-up form:    GET  http://localhost:8000/signup")
    print("   - Sign in:         POST http://localhost:8000/login")
    print("   - Invoice list:    GET  http://localhost:8000/dashboard/invoices")
    print("   - API Docs:             http://localhost:8000/docs")
    print()
    print("📝 Test with curl:")
    print('   curl -i -X POST "http://localhost:8000/login" \\')
    print('     -d "email=user@nextmail.com" -d "password=123456"')
    print()
    print("=" * 60)

    uvicorn.run(
        "invoicing.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
