"""
Services layer - Business logic goes here.
Keep services focused on one concern each (storage, complaints, departments, analytics).

DESIGN PRINCIPLE:
- Services contain business logic, NOT routes
- Rule violations raise ValueError; routes turn them into HTTP errors
- All persistence goes through storage_service
"""
