"""
Interactive front ends for the snake game.
"""
