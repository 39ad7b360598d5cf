#!/usr/bin/env python3
"""Script para probar la conexión con Firestore y los repositorios."""

import asyncio
import sys
from pathlib import Path

# Añadir el directorio raíz al path
sys.path.insert(0, str(Path(__file__).parent.parent))


async def main():
    from memoria.config import get_settings
    from memoria.domain.repositories import FirestoreNoteRepository, FirestoreProfileRepository
    from memoria.domain.usecases import CheckProfileExists, GetUserNotes
    from memoria.services.firestore import get_firestore_service

    print("=" * 60)
    print("         FIRESTORE CONNECTION TEST")
    print("=" * 60)
    print()

    settings = get_settings()
    store = get_firestore_service()

    # Test 1: Conexión básica
    print("1. Probando conexión...")
    if settings.uses_emulator:
        print(f"   (emulador: {settings.firestore_emulator_host})")
    if await store.test_connection():
        print("   ✓ Conexión exitosa\n")
    else:
        print("   ✗ Error de conexión. Verifica FIRESTORE_PROJECT_ID y las credenciales\n")
        return

    user_id = input("2. ID de usuario a consultar: ").strip()
    if not user_id:
        print("   Omitido")
        return
    print()

    # Test 3: Perfil
    print("3. Verificando perfil...")
    profiles = FirestoreProfileRepository(store)
    if await CheckProfileExists(profiles).execute(user_id):
        profile = await profiles.find_by_user_id(user_id)
        print(f"   ✓ {profile.name} ({profile.gender}), creado {profile.created_at}")
    else:
        print("   ⚠ El usuario no tiene perfil")
    print()

    # Test 4: Notas
    print("4. Obteniendo notas...")
    try:
        notes = await GetUserNotes(FirestoreNoteRepository(store)).execute(user_id)
    except Exception as e:
        print(f"   ✗ {e}")
        return
    if notes:
        print(f"   ✓ {len(notes)} notas encontradas:")
        for note in notes[:5]:
            print(f"      [{note.updated_at}] {note.title}")
    else:
        print("   ⚠ No hay notas")
    print()


if __name__ == "__main__":
    asyncio.run(main())
