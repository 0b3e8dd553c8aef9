"""storelint — lint rules that keep Vuex store modules out of bounds."""

__version__ = "0.1.0"
