"""Static configuration tables"""
