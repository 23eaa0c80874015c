"""Collection operations and derived views over trip state"""
