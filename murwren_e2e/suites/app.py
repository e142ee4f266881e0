"""Selectors, expected copy and page expressions of the app under test.

Every expression is a JavaScript function evaluated in the page; it returns
plain data only.
"""

TITLE = "Edward R. Mur-Wren"
TAGLINE = '"Good night, and good chirp."'
BADGE = "Vintage Audio Transformer"
GITHUB_REPO = "sparrowfm/edward-r-mur-wren"

FILE_INPUT = "#file"
LOAD_SAMPLE_BUTTON = "#loadSampleBtn"
PRESET_SELECT = "#preset"
PREVIEW_BUTTON = "#previewBtn"
STOP_BUTTON = "#stopBtn"
RENDER_BUTTON = "#renderBtn"

# Slider element ids keyed by preset parameter name
PARAMETER_INPUTS = {
    "hp": "hp",
    "lp": "lp",
    "delay": "delayMs",
    "wet": "wet",
    "fb": "fb",
    "hiss": "hiss",
}

PAGE_READY = "() => document.readyState === 'complete'"

# TODO: switch to a data-state attribute once the app exposes one; the load
# button label glyph is the only completion signal today.
SAMPLE_LOAD_SETTLED = """() => {
  const text = document.getElementById('loadSampleBtn').textContent;
  return text.includes('✓') || text.includes('✗');
}"""

LOAD_BUTTON_TEXT = "() => document.getElementById('loadSampleBtn').textContent"

PREVIEW_ENABLED = "() => !document.getElementById('previewBtn').disabled"
RENDER_ENABLED = "() => !document.getElementById('renderBtn').disabled"
STOP_ENABLED = "() => !document.getElementById('stopBtn').disabled"
STOP_DISABLED = "() => document.getElementById('stopBtn').disabled"

DOWNLOAD_HREF = "() => document.getElementById('dl').href"

# Ready once the link offers a download other than the previous one
DOWNLOAD_READY = """(previous) => {
  const link = document.getElementById('dl');
  return link.textContent === 'Download WAV' && link.href !== previous;
}"""

DOWNLOAD_INFO = """() => {
  const link = document.getElementById('dl');
  return {
    text: link.textContent,
    isBlob: !!link.href && link.href.startsWith('blob:'),
    filename: link.download
  };
}"""

PARAMETER_READBACK = """(inputs) => Object.fromEntries(
  Object.entries(inputs).map(([name, id]) => [name, document.getElementById(id).value])
)"""

SET_INPUT = """([id, value]) => {
  const input = document.getElementById(id);
  input.value = value;
  input.dispatchEvent(new Event('input', { bubbles: true }));
}"""

LABEL_EQUALS = "([id, text]) => document.getElementById(id).textContent === text"

DESKTOP_LAYOUT = """() => {
  const main = document.querySelector('.main-content');
  const mobile = document.querySelector('.mobile-message');
  return !!main && !!mobile &&
    window.getComputedStyle(main).display !== 'none' &&
    window.getComputedStyle(mobile).display === 'none';
}"""

BRANDING = """() => ({
  title: document.querySelector('.branding h1')?.textContent?.trim() ?? null,
  tagline: document.querySelector('.tagline')?.textContent?.trim() ?? null,
  badge: document.querySelector('.vintage-badge')?.textContent?.trim() ?? null,
  subtitle: document.querySelector('.subtitle')?.textContent ?? ''
})"""

MOBILE_VIEW = """() => {
  const main = document.querySelector('.main-content');
  const mobile = document.querySelector('.mobile-message');
  const paragraphs = Array.from(document.querySelectorAll('.mobile-message p'));
  return {
    mobileMessageVisible: !!mobile && window.getComputedStyle(mobile).display !== 'none',
    mainContentHidden: !!main && window.getComputedStyle(main).display === 'none',
    text: paragraphs.map(p => p.textContent).join(' ')
  };
}"""

CONTROLS = """() => {
  const has = id => !!document.getElementById(id);
  return {
    fileInput: has('file'),
    loadSampleBtn: has('loadSampleBtn'),
    presetSelect: has('preset'),
    sliders: ['delayMs', 'wet', 'fb', 'hp', 'lp', 'hiss'].every(has),
    previewBtn: has('previewBtn'),
    stopBtn: has('stopBtn'),
    renderBtn: has('renderBtn'),
    downloadLink: has('dl'),
    presetOptions: Array.from(document.querySelectorAll('#preset option')).map(o => o.value)
  };
}"""

INITIAL_STATE = """() => ({
  previewDisabled: document.getElementById('previewBtn').disabled,
  stopDisabled: document.getElementById('stopBtn').disabled,
  renderDisabled: document.getElementById('renderBtn').disabled,
  downloadText: document.getElementById('dl').textContent,
  selectedPreset: document.getElementById('preset').value
})"""

VISUAL_ELEMENTS = """() => {
  const body = window.getComputedStyle(document.body);
  const container = document.querySelector('.container');
  const containerStyle = container ? window.getComputedStyle(container) : null;
  const footer = document.querySelector('footer');
  const githubLink = document.querySelector('footer a[href*="github"]');
  return {
    hasGradientBg: body.background.includes('gradient') || body.background.includes('667eea'),
    containerBorderRadius: containerStyle ? containerStyle.borderRadius : '0px',
    containerBoxShadow: !!containerStyle && containerStyle.boxShadow !== 'none',
    hasFooter: !!footer,
    footerText: footer ? footer.textContent : '',
    githubUrl: githubLink ? githubLink.href : null
  };
}"""

FORM_STRUCTURE = """() => ({
  legends: Array.from(document.querySelectorAll('legend')).map(l => l.textContent),
  labelCount: document.querySelectorAll('label').length
})"""

ACCESSIBILITY = """() => ({
  lang: document.documentElement.getAttribute('lang'),
  title: document.title,
  hasMetaCharset: !!document.querySelector('meta[charset]'),
  hasViewport: !!document.querySelector('meta[name="viewport"]'),
  hasFavicon: !!document.querySelector('link[rel="icon"]')
})"""

OG_TITLE = "Cronkiter"

# Frames the desktop layout for a 1200x630 social preview card
OG_RESTYLE = """(title) => {
  const mobile = document.querySelector('.mobile-message');
  if (mobile) mobile.style.display = 'none';
  const main = document.querySelector('.main-content');
  if (main) main.style.display = 'block';
  const container = document.querySelector('.container');
  if (container) {
    container.style.padding = '30px';
    container.style.maxWidth = '1200px';
  }
  const h1 = document.querySelector('.branding h1');
  if (h1) {
    h1.style.fontSize = '2.2em';
    h1.textContent = title;
  }
  const footer = document.querySelector('footer');
  if (footer) footer.style.display = 'none';
  document.querySelectorAll('fieldset').forEach(fs => {
    fs.style.marginBottom = '15px';
    fs.style.padding = '15px';
  });
  const controls = document.querySelector('.controls');
  if (controls) controls.style.marginTop = '15px';
  return !!h1 && h1.textContent === title;
}"""
