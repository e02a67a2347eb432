from site_search.storage.page_store import FilePageStore, PageStore, PageStoreError, PersistedPage

__all__ = ["FilePageStore", "PageStore", "PageStoreError", "PersistedPage"]
