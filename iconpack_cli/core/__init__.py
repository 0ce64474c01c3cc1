"""
Core application engine for the icon pack workflow.

The `IconChanger` acts as the high-level coordinator: it discovers packs via the
`ConfigCatalog`, loads their mappings, makes sure the original icons are backed
up, and hands the actual downloading to the `DownloadPipeline`.
"""
