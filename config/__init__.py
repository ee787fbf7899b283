"""
Project configuration: paths and survey-domain constants.
"""
