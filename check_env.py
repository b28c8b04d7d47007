#!/usr/bin/env python3
"""Check (and if missing, scaffold) the .env file used by the Kurir Pintar API."""

from pathlib import Path
import sys

TEMPLATE = """# Supabase Configuration (Required for customers, orders and pricing)
# Get these from: https://supabase.com/dashboard → Your Project → Settings → API
KURIR_SUPABASE_URL=https://your-project-id.supabase.co
KURIR_SUPABASE_KEY=your-service-role-key-here

# AI gateway used for route optimization
KURIR_AI_GATEWAY_API_KEY=your-gateway-key-here
# KURIR_AI_GATEWAY_URL=https://ai.gateway.lovable.dev/v1/chat/completions
# KURIR_ROUTE_MODEL=google/gemini-2.5-flash

# API Configuration
KURIR_API_PREFIX=/api
# KURIR_FRONTEND_ALLOWED_ORIGINS - JSON array or comma-separated, defaults to *
"""

SECRET_KEYS = ("KURIR_SUPABASE_KEY", "KURIR_AI_GATEWAY_API_KEY")


def _mask(value: str) -> str:
    if len(value) > 20:
        return value[:12] + "..." + value[-6:]
    return value


def _print_env_file(env_file: Path) -> None:
    print("Current contents:")
    print("-" * 60)
    for line in env_file.read_text(encoding="utf-8").splitlines():
        name, sep, value = line.partition("=")
        if sep and name.strip() in SECRET_KEYS:
            print(f"{name}={_mask(value.strip())}")
        else:
            print(line)
    print("-" * 60)
    print()


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Kurir Pintar Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"✅ Created template .env file at: {env_file}")
        print("⚠️  Please edit .env and add your Supabase and AI gateway credentials!")
        return

    print(f"✅ Found .env file at: {env_file}")
    print()
    _print_env_file(env_file)

    try:
        sys.path.insert(0, str(project_root / "src"))
        from kurir.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print("Make sure you're running this from the project root directory")
        return

    checks = {
        "Supabase URL": settings.supabase_url,
        "Supabase key": settings.supabase_key,
        "AI gateway key": settings.ai_gateway_api_key,
    }
    for label, value in checks.items():
        print(f"{'✅' if value else '❌'} {label}: {_mask(value) if value else 'not set'}")
    print()

    if all(checks.values()):
        print("✅ SUCCESS: Kurir Pintar is fully configured!")
    else:
        print("Troubleshooting:")
        print("1. Make sure .env file exists in project root")
        print("2. Make sure variables start with KURIR_ prefix")
        print("3. Make sure there are no spaces around = sign")
        print("4. Restart backend after editing .env")


if __name__ == "__main__":
    main()
