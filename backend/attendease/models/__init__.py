# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant l'appel à Base.metadata.create_all() au démarrage de l'application.

from attendease.models.kv_entry import KeyValueEntry  # noqa: F401
