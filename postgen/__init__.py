'''
Generate the Makefile and the index page of a pandoc-built blog
from a directory of Markdown posts.
'''

__version__ = '0.3.0'
