"""
Prompt and request-body construction for the Gemini `generateContent` call.

The template is kept byte-for-byte identical to the one the frontend was
tuned against (indentation included). Only `{language}` is substituted.
"""

from __future__ import annotations

LANGUAGE_PLACEHOLDER = "{language}"

ANALYSIS_PROMPT_TEMPLATE = """
            Analizza l'immagine di questo referto medico o ricetta in modo approfondito. Il tuo obiettivo è spiegare le problematiche riscontrate al paziente.
            1. **Trascrizione del Contenuto:** Prima di tutto, trascrivi il testo essenziale del documento per dare contesto.
            2. **Identificazione delle Problematiche:** Analizza i valori, le diagnosi o le prescrizioni. Identifica quali sono i punti critici o le problematiche principali (es. valori fuori norma, diagnosi di una patologia, interazioni tra farmaci prescritti).
            3. **Spiegazione Semplice:** Spiega ogni problematica identificata in un linguaggio chiaro, semplice e diretto, come se parlassi a un paziente che non ha conoscenze mediche. Evita il gergo tecnico il più possibile.
            4. **Organizzazione:** Struttura la risposta in formato Markdown con le seguenti sezioni:
               - ### Riepilogo del Contenuto
               - ### Analisi delle Problematiche
               - ### Spiegazione dei Termini Chiave
            Non includere avvisi o disclaimer nella tua risposta, verranno aggiunti dall'applicazione. Se l'immagine non è un documento medico o non è leggibile, rispondi con un messaggio che lo segnali. Usa h3 (###) per i titoli delle sezioni.
            Rispondi esclusivamente nella seguente lingua: {language}.
        """


def build_prompt(language: str, template: str = ANALYSIS_PROMPT_TEMPLATE) -> str:
    # str.replace rather than str.format: custom templates may contain literal braces.
    return template.replace(LANGUAGE_PLACEHOLDER, language)


def build_payload(prompt: str, mime_type: str, data: str) -> dict:
    """Wrap the prompt and the inline image into a single-turn user message."""
    return {
        "contents": [
            {
                "role": "user",
                "parts": [
                    {"text": prompt},
                    {"inlineData": {"mimeType": mime_type, "data": data}},
                ],
            }
        ],
    }
