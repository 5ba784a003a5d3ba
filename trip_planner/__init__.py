"""
AI Trip Planning service powered by Google Gemini.

This package implements the backend of a trip planner: users sign up,
describe a trip through a three-step form, and receive a day-by-day
itinerary generated by Gemini that is stored in DynamoDB.
"""

__version__ = "0.1.0"
