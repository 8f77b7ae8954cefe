from textarray.serializers.text import check_length  # NOQA
from textarray.serializers.text import DEFAULT_ENCODING  # NOQA
from textarray.serializers.text import deserialize  # NOQA
from textarray.serializers.text import load_text  # NOQA
from textarray.serializers.text import save_text  # NOQA
from textarray.serializers.text import serialize  # NOQA
from textarray.serializers.text import TextDeserializer  # NOQA
from textarray.serializers.text import TextSerializer  # NOQA
