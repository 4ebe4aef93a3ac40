from local_places.models.place import Place

__all__ = ["Place"]
