"""
Services layer - business logic goes here.

DESIGN PRINCIPLE:
- The report store is the only component that creates, changes or deletes reports
- Workflow and filtering are pure functions over report values
- Routes never touch storage directly
"""
