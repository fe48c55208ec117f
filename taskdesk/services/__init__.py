"""Domain services: scoring, task CRUD, and text-generation workflows."""
