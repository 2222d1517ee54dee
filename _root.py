import os

project_root = os.path.dirname(os.path.abspath(__file__))
