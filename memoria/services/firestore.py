"""Servicio de Firestore para interactuar con el almacén de documentos.

Los documentos se direccionan como ``{coleccion}/{id}``. Este servicio no
traga errores: los repositorios los envuelven en errores de dominio.
"""

import logging
import os
from typing import Any

from google.api_core.exceptions import GoogleAPIError
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from memoria.config import get_settings

logger = logging.getLogger(__name__)


class FirestoreService:
    """Cliente asíncrono sobre Firestore."""

    def __init__(self, client: firestore.AsyncClient | None = None):
        self.client = client or self._build_client()

    @staticmethod
    def _build_client() -> firestore.AsyncClient:
        settings = get_settings()
        if settings.uses_emulator:
            # El SDK detecta el emulador por variable de entorno
            os.environ.setdefault("FIRESTORE_EMULATOR_HOST", settings.firestore_emulator_host)
            logger.info(f"Usando emulador de Firestore en {settings.firestore_emulator_host}")
        return firestore.AsyncClient(
            project=settings.firestore_project_id or None,
            database=settings.firestore_database,
        )

    # ==================== DOCUMENTOS ====================

    async def get_document(self, collection: str, document_id: str) -> dict[str, Any] | None:
        """Obtiene un documento por ID; None si no existe."""
        snapshot = await self.client.collection(collection).document(document_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict() or {}

    async def set_document(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Crea o reemplaza el documento completo."""
        await self.client.collection(collection).document(document_id).set(data)
        logger.debug(f"Documento {collection}/{document_id} guardado")

    async def update_document(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Actualiza campos de un documento existente (falla si no existe)."""
        await self.client.collection(collection).document(document_id).update(data)
        logger.debug(f"Documento {collection}/{document_id} actualizado")

    async def add_document(self, collection: str, data: dict[str, Any]) -> str:
        """Inserta un documento con ID generado por el almacén."""
        _, doc_ref = await self.client.collection(collection).add(data)
        logger.debug(f"Documento {collection}/{doc_ref.id} creado")
        return doc_ref.id

    # ==================== QUERIES ====================

    async def query_by_field(
        self, collection: str, field: str, value: Any
    ) -> list[tuple[str, dict[str, Any]]]:
        """Busca documentos con igualdad en un campo. Retorna pares (id, datos)."""
        query = self.client.collection(collection).where(filter=FieldFilter(field, "==", value))
        results = []
        async for snapshot in query.stream():
            results.append((snapshot.id, snapshot.to_dict() or {}))
        return results

    # ==================== UTILS ====================

    async def test_connection(self) -> bool:
        """Verifica la conexión con Firestore."""
        try:
            async for _ in self.client.collections():
                break
            logger.info("Conexión con Firestore exitosa")
            return True
        except GoogleAPIError as e:
            logger.error(f"Error de conexión con Firestore: {e}")
            return False

    async def close(self) -> None:
        """Cierra el canal gRPC si el cliente llegó a abrirlo."""
        # AsyncClient no expone close(); el canal vive en el cliente GAPIC
        api = self.client._firestore_api_internal
        if api is None:
            return
        await api.transport.close()
        logger.info("Cliente de Firestore cerrado")


# Singleton
_firestore_service: FirestoreService | None = None


def get_firestore_service() -> FirestoreService:
    """Obtiene la instancia del servicio de Firestore."""
    global _firestore_service
    if _firestore_service is None:
        _firestore_service = FirestoreService()
    return _firestore_service
