"""
HomeMade: a marketplace API for home-cooked food.

Sellers post listings with a pickup window and location; buyers search by
free text and by where they are, exactly or within a radius.
"""
