import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Firebase (service account JSON is required at startup, see db.init_firebase)
FIREBASE_SERVICE_ACCOUNT = os.getenv("FIREBASE_SERVICE_ACCOUNT")
FIREBASE_DATABASE_URL = os.getenv("FIREBASE_DATABASE_URL")

# Gemini
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")

# Server
PORT = int(os.getenv("PORT", "5000"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:5173").split(",")

# Calendar day used for attendance keys
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

# Periodic AI alert generation, 0 disables the job
AI_AUTO_RUN_MINUTES = int(os.getenv("AI_AUTO_RUN_MINUTES", "0"))
