"""
Translation strings for all supported languages.

Keys mirror the resource and subkey of the errors and warnings in
faerie_editor.core.errors.
"""

LANGUAGES = {
    "en": "English",
    "pt_BR": "Português (Brasil)",
}

# =============================================================================
# ENGLISH (Default)
# =============================================================================
EN = {
    "severity": {
        "info": "Information",
        "warning": "Warning",
        "error": "Error",
        "fatal": "Fatal error",
    },

    # Configuration parsing
    "parse": {
        "incomplete": "The sprite is missing a required ASM file.",
        "encoding": "The file is not valid UTF-8 text.",
        "cfg": {
            "too_few": "Incomplete configuration file: at least {min} lines are needed, found {found}.",
            "legacy": "This is a legacy configuration file. The subtype defaults to Regular.",
            "type": "Invalid sprite type on line {line}.",
            "acts_like": "Invalid acts like setting on line {line}.",
            "behavior": "Invalid behavior bytes on line {line}.",
            "properties": "Invalid property bytes on line {line}.",
            "subtype": "Invalid sprite subtype on line {line}.",
            "unique_byte": "Invalid unique byte on line {line}.",
            "extra_bytes": "Invalid extra byte count on line {line}.",
            "orphan": "Display data with no preceding section on line {line}.",
            "section": {
                "malformed": "Malformed section definition on line {line}.",
                "duplicate": "Duplicate section [{name}] on line {line}.",
            },
            "display": {
                "position": "Malformed display position on line {line}.",
                "tiles": "Malformed tile on line {line}.",
            },
        },
        "json": {
            "syntax": "The file is not valid JSON: {detail}",
            "malformed": "The JSON file does not contain a configuration object.",
            "legacy": "The file has no subtype. It was probably made for an older tool.",
        },
    },

    # Palettes
    "palette": {
        "too_short": "The palette file is too short: {expected} bytes are needed, found {found}.",
        "bad_magic": "The palette file is malformed (header {found}).",
        "index": "There is no color {index} in the palette.",
        "type": "The file is not a palette file.",
    },

    # Providers
    "file": {
        "load": {
            "file": "The file doesn't exist or can't be read.",
            "type": "Unknown file type.",
            "rom": {
                "type": "Unknown ROM image type.",
                "title": "This is not the expected game (found \"{found}\").",
                "read": "Error reading the ROM file.",
            },
        },
        "provision": {
            "index": "There is no sprite {index}.",
            "configuration": {
                "io": "Can't read the configuration file.",
                "type": "Unknown configuration file type.",
                "malformed": "Malformed configuration file: {detail}",
            },
            "rom": {
                "io": "Error reading the ROM file.",
            },
        },
        "save": {
            "configuration": {
                "type": "Unsupported file type.",
                "empty": "There is no sprite to save.",
                "io": "Can't write to the file.",
            },
            "rom": {
                "different": "Sprites can only be written back to the ROM they came from.",
                "title": "This is not the expected game (found \"{found}\").",
                "write": "Error writing the ROM file.",
            },
        },
    },

    "provider": {
        "default_name": "Sprite",
        "rom_sprite": "Sprite {index:02X}",
    },
}

# =============================================================================
# PORTUGUESE (Brazil)
# =============================================================================
PT_BR = {
    "severity": {
        "info": "Informação",
        "warning": "Aviso",
        "error": "Erro",
        "fatal": "Erro fatal",
    },

    "parse": {
        "incomplete": "Está faltando um arquivo ASM obrigatório no sprite.",
        "encoding": "O arquivo não é um texto UTF-8 válido.",
        "cfg": {
            "too_few": "Arquivo de configuração incompleto: são necessárias pelo menos {min} linhas, encontradas {found}.",
            "legacy": "Este é um arquivo de configuração antigo. O subtipo padrão é Regular.",
            "type": "Tipo de sprite inválido na linha {line}.",
            "acts_like": "Valor \"acts like\" inválido na linha {line}.",
            "behavior": "Bytes de comportamento inválidos na linha {line}.",
            "properties": "Bytes de propriedade inválidos na linha {line}.",
            "subtype": "Subtipo de sprite inválido na linha {line}.",
            "unique_byte": "Byte único inválido na linha {line}.",
            "extra_bytes": "Quantidade de bytes extras inválida na linha {line}.",
            "orphan": "Dados de exibição sem seção na linha {line}.",
            "section": {
                "malformed": "Definição de seção malformada na linha {line}.",
                "duplicate": "Seção [{name}] duplicada na linha {line}.",
            },
            "display": {
                "position": "Posição de exibição malformada na linha {line}.",
                "tiles": "Tile malformado na linha {line}.",
            },
        },
        "json": {
            "syntax": "O arquivo não é um JSON válido: {detail}",
            "malformed": "O arquivo JSON não contém um objeto de configuração.",
            "legacy": "O arquivo não tem subtipo. Provavelmente foi feito para uma ferramenta antiga.",
        },
    },

    "palette": {
        "too_short": "O arquivo de paleta é curto demais: são necessários {expected} bytes, encontrados {found}.",
        "bad_magic": "O arquivo de paleta está malformado (cabeçalho {found}).",
        "index": "Não existe a cor {index} na paleta.",
        "type": "O arquivo não é um arquivo de paleta.",
    },

    "file": {
        "load": {
            "file": "O arquivo não existe ou não pode ser lido.",
            "type": "Tipo de arquivo desconhecido.",
            "rom": {
                "type": "Tipo de imagem ROM desconhecido.",
                "title": "Este não é o jogo esperado (encontrado \"{found}\").",
                "read": "Erro ao ler o arquivo ROM.",
            },
        },
        "provision": {
            "index": "Não existe o sprite {index}.",
            "configuration": {
                "io": "Não foi possível ler o arquivo de configuração.",
                "type": "Tipo de arquivo de configuração desconhecido.",
                "malformed": "Arquivo de configuração malformado: {detail}",
            },
            "rom": {
                "io": "Erro ao ler o arquivo ROM.",
            },
        },
        "save": {
            "configuration": {
                "type": "Tipo de arquivo não suportado.",
                "empty": "Não há nenhum sprite para salvar.",
                "io": "Não foi possível escrever no arquivo.",
            },
            "rom": {
                "different": "Sprites só podem ser gravados na ROM de onde vieram.",
                "title": "Este não é o jogo esperado (encontrado \"{found}\").",
                "write": "Erro ao gravar o arquivo ROM.",
            },
        },
    },

    "provider": {
        "default_name": "Sprite",
        "rom_sprite": "Sprite {index:02X}",
    },
}

TRANSLATIONS = {
    "en": EN,
    "pt_BR": PT_BR,
}
