"""Codec lookup by format tag or file extension."""

import logging
import os
from typing import Dict, List, Optional

from ..models.core import RecordFormat


logger = logging.getLogger(__name__)


class CodecFactory:
    """Creates codec instances for the supported formats"""

    def __init__(self):
        self._codec_classes: Dict[RecordFormat, type] = {}
        self._register_default_codecs()

    def _register_default_codecs(self):
        """Register default codec classes"""
        # Import codecs here to avoid circular imports
        from ..formats.binary_format import BinaryCodec
        from ..formats.csv_format import CSVCodec
        from ..formats.text_format import TextCodec

        for codec_class in (BinaryCodec, CSVCodec, TextCodec):
            self.register_codec(codec_class.format, codec_class)

    def register_codec(self, format_type, codec_class):
        """Register a codec class for a specific format"""
        self._codec_classes[RecordFormat.parse(format_type)] = codec_class

    def get_codec(self, format_type):
        """
        Get codec instance by format tag

        Args:
            format_type: RecordFormat or tag string ('binary', 'text', 'csv')

        Returns:
            Codec instance

        Raises:
            UnknownFormat: If the tag is not a supported format
        """
        fmt = RecordFormat.parse(format_type)
        return self._codec_classes[fmt]()

    def detect_format(self, file_path: str) -> Optional[RecordFormat]:
        """Guess the format of a file from its extension"""
        extension = os.path.splitext(file_path)[1].lower()
        for fmt, codec_class in self._codec_classes.items():
            if extension in codec_class().get_supported_extensions():
                logger.debug(f"Detected {fmt.value} format for {file_path}")
                return fmt
        return None

    def get_supported_formats(self) -> List[str]:
        """Get list of supported format tags"""
        return sorted(fmt.value for fmt in self._codec_classes)


_default_factory: Optional[CodecFactory] = None


def get_codec(format_type):
    """Get codec instance from the shared default factory"""
    global _default_factory
    if _default_factory is None:
        _default_factory = CodecFactory()
    return _default_factory.get_codec(format_type)
